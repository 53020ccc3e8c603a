"""Stable public API surface for CompareKit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from typing import Any

from comparepack.comparators import (
    Comparator,
    ComparatorRegistry,
    DOMNodeComparator,
    get_active_registry,
    node_to_text,
)
from comparepack.core import ComparisonOptions
from comparepack.diff import ComparisonFailure, render_unified_diff

__version__ = "0.1.0"


def assert_equals(
    expected: Any,
    actual: Any,
    *,
    delta: float = 0.0,
    canonicalize: bool = False,
    ignore_case: bool = False,
    registry: ComparatorRegistry | None = None,
) -> None:
    """Assert that two values are equal.

    Uses ``registry`` when given, otherwise the active registry. Raises
    ``ComparisonFailure`` describing the mismatch when the values differ.
    """
    active_registry = registry if registry is not None else get_active_registry()
    active_registry.assert_equals(
        expected,
        actual,
        ComparisonOptions(
            delta=delta,
            canonicalize=canonicalize,
            ignore_case=ignore_case,
        ),
    )


def is_equal(
    expected: Any,
    actual: Any,
    *,
    delta: float = 0.0,
    canonicalize: bool = False,
    ignore_case: bool = False,
    registry: ComparatorRegistry | None = None,
) -> bool:
    """Return whether two values are equal without raising on mismatch."""
    try:
        assert_equals(
            expected,
            actual,
            delta=delta,
            canonicalize=canonicalize,
            ignore_case=ignore_case,
            registry=registry,
        )
    except ComparisonFailure:
        return False
    return True


__all__ = [
    "__version__",
    "ComparisonFailure",
    "ComparisonOptions",
    "ComparatorRegistry",
    "Comparator",
    "DOMNodeComparator",
    "assert_equals",
    "is_equal",
    "node_to_text",
    "render_unified_diff",
]
