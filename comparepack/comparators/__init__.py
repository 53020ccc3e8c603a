"""Comparator subsystem for CompareKit."""

from comparepack.comparators.base import Comparator, mark_processed
from comparepack.comparators.containers import MappingComparator, SequenceComparator
from comparepack.comparators.dom import (
    EMPTY_DOCUMENT_TEXT,
    DOMNodeComparator,
    is_dom_document,
    is_dom_node,
    node_to_text,
)
from comparepack.comparators.exceptions import ComparatorError, ComparatorRegistryError
from comparepack.comparators.objects import ObjectComparator
from comparepack.comparators.registry import (
    ComparatorRegistry,
    default_comparators,
    get_active_registry,
    reset_default_registry,
)
from comparepack.comparators.runtime import use_registry
from comparepack.comparators.scalar import NumericComparator, ScalarComparator, TypeComparator

__all__ = [
    "ComparatorError",
    "ComparatorRegistryError",
    "Comparator",
    "DOMNodeComparator",
    "NumericComparator",
    "ScalarComparator",
    "MappingComparator",
    "SequenceComparator",
    "ObjectComparator",
    "TypeComparator",
    "ComparatorRegistry",
    "default_comparators",
    "EMPTY_DOCUMENT_TEXT",
    "is_dom_node",
    "is_dom_document",
    "node_to_text",
    "mark_processed",
    "get_active_registry",
    "reset_default_registry",
    "use_registry",
]
