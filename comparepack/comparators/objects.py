"""Generic object comparator."""

from __future__ import annotations

from collections.abc import Mapping
import numbers
from typing import Any

from comparepack.comparators.base import mark_processed
from comparepack.comparators.containers import MISSING, MappingComparator
from comparepack.core.exporter import export_text, object_state
from comparepack.core.options import ProcessedPairs
from comparepack.diff.failure import ComparisonFailure

_NON_OBJECT_TYPES = (
    str,
    bytes,
    bytearray,
    bool,
    type(None),
    numbers.Number,
    Mapping,
    list,
    tuple,
    set,
    frozenset,
)


def is_plain_object(value: Any) -> bool:
    return not isinstance(value, _NON_OBJECT_TYPES)


class ObjectComparator(MappingComparator):
    """Compares two objects of the same class by their attribute state.

    Objects without any attribute state (no ``__dict__`` and no slots) fall
    back to ``==``.
    """

    name = "object"
    failure_message = "Failed asserting that two objects are equal."

    def accepts(self, expected: Any, actual: Any) -> bool:
        return is_plain_object(expected) and is_plain_object(actual)

    def assert_equals(
        self,
        expected: Any,
        actual: Any,
        delta: float = 0.0,
        canonicalize: bool = False,
        ignore_case: bool = False,
        processed: ProcessedPairs | None = None,
    ) -> None:
        if type(expected) is not type(actual):
            raise ComparisonFailure(
                expected,
                actual,
                export_text(expected),
                export_text(actual),
                message=(
                    f"{type(actual).__qualname__} is not instance of expected class "
                    f'"{type(expected).__qualname__}".'
                ),
            )

        processed = set() if processed is None else processed
        if not mark_processed(expected, actual, processed):
            return

        expected_state = object_state(expected)
        actual_state = object_state(actual)
        if expected_state is None or actual_state is None:
            if expected == actual:
                return
            raise ComparisonFailure(
                expected,
                actual,
                export_text(expected),
                export_text(actual),
                message=self.failure_message,
            )

        names = sorted(set(expected_state) | set(actual_state))
        result = self.compare_entries(
            (
                (f"{name}=", expected_state.get(name, MISSING), actual_state.get(name, MISSING))
                for name in names
            ),
            delta=delta,
            canonicalize=canonicalize,
            ignore_case=ignore_case,
            processed=processed,
        )
        if result.equal:
            return

        expected_as_string, actual_as_string = result.render(f"{type(expected).__qualname__}(", ")")
        raise ComparisonFailure(
            expected,
            actual,
            expected_as_string,
            actual_as_string,
            message=self.failure_message,
        ) from result.first_failure
