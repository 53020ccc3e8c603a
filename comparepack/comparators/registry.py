"""Ordered comparator registry with first-match dispatch."""

from __future__ import annotations

import logging
from typing import Any

from comparepack.comparators.base import Comparator
from comparepack.comparators.containers import MappingComparator, SequenceComparator
from comparepack.comparators.dom import DOMNodeComparator
from comparepack.comparators.exceptions import ComparatorRegistryError
from comparepack.comparators.objects import ObjectComparator
from comparepack.comparators.runtime import active_registry, use_registry
from comparepack.comparators.scalar import NumericComparator, ScalarComparator, TypeComparator
from comparepack.core.options import ComparisonOptions

logger = logging.getLogger(__name__)

_DEFAULT_REGISTRY: ComparatorRegistry | None = None


def default_comparators() -> tuple[Comparator, ...]:
    """Built-in comparators, most specific first."""
    return (
        DOMNodeComparator(),
        NumericComparator(),
        ScalarComparator(),
        MappingComparator(),
        SequenceComparator(),
        ObjectComparator(),
        TypeComparator(),
    )


class ComparatorRegistry:
    """Selects the first comparator that accepts a pair of values.

    Custom comparators are consulted before the defaults, the most recently
    registered one first. Only the first accepting comparator is used. While
    ``assert_equals`` runs, the registry is active in the current context so
    nested values dispatch through it as well.
    """

    def __init__(self, *, include_defaults: bool = True) -> None:
        self._custom: list[Comparator] = []
        self._defaults: list[Comparator] = list(default_comparators()) if include_defaults else []

    @property
    def comparators(self) -> tuple[Comparator, ...]:
        return (*self._custom, *self._defaults)

    def register(self, comparator: Comparator) -> None:
        if not isinstance(comparator, Comparator):
            raise ComparatorRegistryError(
                f"Cannot register {type(comparator).__qualname__}: not a Comparator."
            )
        self._custom.insert(0, comparator)

    def unregister(self, comparator: Comparator) -> None:
        for index, registered in enumerate(self._custom):
            if registered is comparator:
                del self._custom[index]
                return
        raise ComparatorRegistryError(
            f"Comparator '{_comparator_name(comparator)}' is not registered."
        )

    def reset(self) -> None:
        self._custom.clear()

    def get_comparator_for(self, expected: Any, actual: Any) -> Comparator:
        for comparator in self.comparators:
            if comparator.accepts(expected, actual):
                logger.debug(
                    "comparator %s selected for %s/%s",
                    _comparator_name(comparator),
                    type(expected).__qualname__,
                    type(actual).__qualname__,
                )
                return comparator
        raise ComparatorRegistryError(
            f"No comparator accepts {type(expected).__qualname__} "
            f"and {type(actual).__qualname__}."
        )

    def assert_equals(
        self,
        expected: Any,
        actual: Any,
        options: ComparisonOptions | None = None,
    ) -> None:
        """Dispatch ``expected``/``actual`` to the first accepting comparator."""
        resolved = options if options is not None else ComparisonOptions()
        comparator = self.get_comparator_for(expected, actual)
        with use_registry(self):
            comparator.assert_equals(expected, actual, **resolved.to_kwargs())


def get_active_registry() -> ComparatorRegistry:
    """Registry activated in the current context, else the process-wide default."""
    registry = active_registry()
    if registry is not None:
        return registry

    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = ComparatorRegistry()
    return _DEFAULT_REGISTRY


def reset_default_registry() -> None:
    """Drop the process-wide default registry (for tests)."""
    global _DEFAULT_REGISTRY
    _DEFAULT_REGISTRY = None


def _comparator_name(comparator: object) -> str:
    name = getattr(comparator, "name", comparator.__class__.__name__)
    return str(name)
