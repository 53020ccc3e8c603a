"""Comparator subsystem exceptions."""


class ComparatorError(Exception):
    """Base class for comparator subsystem errors."""


class ComparatorRegistryError(ComparatorError, ValueError):
    """Raised when comparator registration or lookup fails."""
