"""Comparators for numbers, scalars, and mismatched types."""

from __future__ import annotations

import math
import numbers
from typing import Any

from comparepack.comparators.base import Comparator
from comparepack.core.exporter import export_text, shortened_export
from comparepack.core.options import ProcessedPairs
from comparepack.diff.failure import ComparisonFailure

_SCALAR_TYPES = (str, bytes, bytearray, bool, type(None))


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, _SCALAR_TYPES) or _is_number(value)


def _mismatch_message(expected: Any, actual: Any) -> str:
    return (
        f"Failed asserting that {shortened_export(actual)} "
        f"matches expected {shortened_export(expected)}."
    )


class NumericComparator(Comparator):
    """Compares two numbers, allowing an absolute ``delta`` of difference."""

    name = "numeric"

    def accepts(self, expected: Any, actual: Any) -> bool:
        return _is_number(expected) and _is_number(actual)

    def assert_equals(
        self,
        expected: Any,
        actual: Any,
        delta: float = 0.0,
        canonicalize: bool = False,
        ignore_case: bool = False,
        processed: ProcessedPairs | None = None,
    ) -> None:
        if _numbers_equal(expected, actual, delta):
            return

        raise ComparisonFailure(
            expected,
            actual,
            "",
            "",
            message=_mismatch_message(expected, actual),
        )


def _numbers_equal(expected: Any, actual: Any, delta: float) -> bool:
    if expected == actual:
        return True
    if _is_nan(expected) or _is_nan(actual):
        return False
    if _is_infinite(expected) or _is_infinite(actual):
        return False

    try:
        distance = abs(expected - actual)
    except TypeError:
        # Decimal does not mix with float arithmetic.
        distance = abs(float(expected) - float(actual))
    return distance <= delta


def _is_nan(value: Any) -> bool:
    return value != value


def _is_infinite(value: Any) -> bool:
    try:
        return math.isinf(value)
    except (TypeError, ValueError):
        return False


class ScalarComparator(Comparator):
    """Compares strings, bytes, booleans, ``None`` and mixed scalar pairs."""

    name = "scalar"

    def accepts(self, expected: Any, actual: Any) -> bool:
        return _is_scalar(expected) and _is_scalar(actual)

    def assert_equals(
        self,
        expected: Any,
        actual: Any,
        delta: float = 0.0,
        canonicalize: bool = False,
        ignore_case: bool = False,
        processed: ProcessedPairs | None = None,
    ) -> None:
        expected_value = expected
        actual_value = actual
        if ignore_case and isinstance(expected, str) and isinstance(actual, str):
            expected_value = expected.lower()
            actual_value = actual.lower()

        if type(expected) is type(actual) and expected_value == actual_value:
            return

        if isinstance(expected, str) and isinstance(actual, str):
            raise ComparisonFailure(
                expected,
                actual,
                export_text(expected),
                export_text(actual),
                message="Failed asserting that two strings are equal.",
            )

        raise ComparisonFailure(
            expected,
            actual,
            "",
            "",
            message=_mismatch_message(expected, actual),
        )


class TypeComparator(Comparator):
    """Last-resort comparator; accepts any pair and checks type then equality."""

    name = "type"

    def accepts(self, expected: Any, actual: Any) -> bool:
        return True

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
                "",
                "",
                message=(
                    f"{shortened_export(actual)} does not match expected type "
                    f'"{type(expected).__qualname__}".'
                ),
            )

        if expected == actual:
            return

        raise ComparisonFailure(
            expected,
            actual,
            export_text(expected),
            export_text(actual),
            message=_mismatch_message(expected, actual),
        )
