"""Recursive comparators for mappings and sequences."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from itertools import zip_longest
from typing import Any

from comparepack.comparators.base import Comparator, mark_processed
from comparepack.core.canonical import canonical_sequence
from comparepack.core.exporter import INDENT, export
from comparepack.core.options import ProcessedPairs
from comparepack.diff.failure import ComparisonFailure

MISSING = object()


@dataclass(slots=True)
class EntryComparison:
    """Side-by-side rendering of compared entries."""

    equal: bool = True
    expected_lines: list[str] = field(default_factory=list)
    actual_lines: list[str] = field(default_factory=list)
    first_failure: ComparisonFailure | None = None

    def render(self, opening: str, closing: str) -> tuple[str, str]:
        return (
            _render_block(opening, closing, self.expected_lines),
            _render_block(opening, closing, self.actual_lines),
        )


def _render_block(opening: str, closing: str, lines: list[str]) -> str:
    if not lines:
        return f"{opening}{closing}\n"
    return "\n".join([opening, *lines, closing]) + "\n"


class MappingComparator(Comparator):
    """Compares two mappings key by key, dispatching values recursively."""

    name = "mapping"
    failure_message = "Failed asserting that two mappings are equal."

    def accepts(self, expected: Any, actual: Any) -> bool:
        return isinstance(expected, Mapping) and isinstance(actual, Mapping)

    def assert_equals(
        self,
        expected: Any,
        actual: Any,
        delta: float = 0.0,
        canonicalize: bool = False,
        ignore_case: bool = False,
        processed: ProcessedPairs | None = None,
    ) -> None:
        processed = set() if processed is None else processed
        if not mark_processed(expected, actual, processed):
            return

        result = self.compare_entries(
            (
                (f"{export(key, indentation=1)}: ", expected.get(key, MISSING), actual.get(key, MISSING))
                for key in _sorted_keys(expected, actual)
            ),
            delta=delta,
            canonicalize=canonicalize,
            ignore_case=ignore_case,
            processed=processed,
        )
        if result.equal:
            return

        expected_as_string, actual_as_string = result.render("{", "}")
        raise ComparisonFailure(
            expected,
            actual,
            expected_as_string,
            actual_as_string,
            message=self.failure_message,
        ) from result.first_failure

    def compare_entries(
        self,
        entries: Iterable[tuple[str, Any, Any]],
        *,
        delta: float,
        canonicalize: bool,
        ignore_case: bool,
        processed: ProcessedPairs,
    ) -> EntryComparison:
        """Compare labelled value pairs; ``MISSING`` marks an absent side."""
        result = EntryComparison()

        for label, expected_value, actual_value in entries:
            if expected_value is MISSING or actual_value is MISSING:
                result.equal = False
                if expected_value is not MISSING:
                    result.expected_lines.append(_entry_line(label, expected_value))
                if actual_value is not MISSING:
                    result.actual_lines.append(_entry_line(label, actual_value))
                continue

            try:
                self.dispatch(
                    expected_value,
                    actual_value,
                    delta=delta,
                    canonicalize=canonicalize,
                    ignore_case=ignore_case,
                    processed=processed,
                )
            except ComparisonFailure as failure:
                result.equal = False
                if result.first_failure is None:
                    result.first_failure = failure
                result.expected_lines.append(_entry_line(label, expected_value))
                result.actual_lines.append(_entry_line(label, actual_value))
                continue

            # Equal entries render identically on both sides so only the
            # mismatches show up in the diff.
            line = _entry_line(label, expected_value)
            result.expected_lines.append(line)
            result.actual_lines.append(line)

        return result


class SequenceComparator(MappingComparator):
    """Compares two lists, two tuples, or two sets element by element.

    With ``canonicalize`` the items are sorted before comparison. Sets are
    always compared in canonical order.
    """

    name = "sequence"
    failure_message = "Failed asserting that two sequences are equal."

    def accepts(self, expected: Any, actual: Any) -> bool:
        if isinstance(expected, (set, frozenset)) and isinstance(actual, (set, frozenset)):
            return True
        if isinstance(expected, list) and isinstance(actual, list):
            return True
        return isinstance(expected, tuple) and isinstance(actual, tuple)

    def assert_equals(
        self,
        expected: Any,
        actual: Any,
        delta: float = 0.0,
        canonicalize: bool = False,
        ignore_case: bool = False,
        processed: ProcessedPairs | None = None,
    ) -> None:
        processed = set() if processed is None else processed
        if not mark_processed(expected, actual, processed):
            return

        expected_items: Any = expected
        actual_items: Any = actual
        if canonicalize or isinstance(expected, (set, frozenset)):
            expected_items = canonical_sequence(expected, ignore_case=ignore_case)
            actual_items = canonical_sequence(actual, ignore_case=ignore_case)

        result = self.compare_entries(
            (
                ("", expected_value, actual_value)
                for expected_value, actual_value in zip_longest(
                    expected_items, actual_items, fillvalue=MISSING
                )
            ),
            delta=delta,
            canonicalize=canonicalize,
            ignore_case=ignore_case,
            processed=processed,
        )
        if result.equal:
            return

        opening, closing = _brackets(expected)
        expected_as_string, actual_as_string = result.render(opening, closing)
        raise ComparisonFailure(
            expected,
            actual,
            expected_as_string,
            actual_as_string,
            message=self.failure_message,
        ) from result.first_failure


def _brackets(value: Any) -> tuple[str, str]:
    if isinstance(value, tuple):
        return "(", ")"
    if isinstance(value, (set, frozenset)):
        return "{", "}"
    return "[", "]"


def _sorted_keys(expected: Mapping[Any, Any], actual: Mapping[Any, Any]) -> list[Any]:
    keys = list(expected.keys())
    keys.extend(key for key in actual.keys() if key not in expected)
    return sorted(keys, key=lambda raw: str(raw))


def _entry_line(label: str, value: Any) -> str:
    return f"{INDENT}{label}{export(value, indentation=1)},"
