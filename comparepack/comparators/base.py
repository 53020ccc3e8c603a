"""Comparator contract shared by every equality strategy."""

from __future__ import annotations

from typing import Any

from comparepack.core.options import ProcessedPairs


class Comparator:
    """Base comparator interface.

    Subclasses implement ``accepts`` and ``assert_equals``. Comparators are
    stateless, so one instance may be registered in several registries.
    Nested values are dispatched through the registry active in the current
    context.
    """

    name = "comparator"

    def accepts(self, expected: Any, actual: Any) -> bool:
        raise NotImplementedError

    def assert_equals(
        self,
        expected: Any,
        actual: Any,
        delta: float = 0.0,
        canonicalize: bool = False,
        ignore_case: bool = False,
        processed: ProcessedPairs | None = None,
    ) -> None:
        """Return when both values are equal, raise ``ComparisonFailure`` otherwise."""
        raise NotImplementedError

    def dispatch(
        self,
        expected: Any,
        actual: Any,
        *,
        delta: float,
        canonicalize: bool,
        ignore_case: bool,
        processed: ProcessedPairs,
    ) -> None:
        """Compare a nested pair with whichever comparator the active registry selects."""
        from comparepack.comparators.registry import get_active_registry

        comparator = get_active_registry().get_comparator_for(expected, actual)
        comparator.assert_equals(
            expected,
            actual,
            delta=delta,
            canonicalize=canonicalize,
            ignore_case=ignore_case,
            processed=processed,
        )


def mark_processed(expected: Any, actual: Any, processed: ProcessedPairs) -> bool:
    """Record a visited pair; return ``False`` if it was already recorded."""
    key = (id(expected), id(actual))
    if key in processed:
        return False
    processed.add(key)
    return True
