"""Comparison failure raised when two values are not equal."""

from __future__ import annotations

from typing import Any

from comparepack.diff.renderer import DEFAULT_DIFF_HEADER, render_unified_diff


class ComparisonFailure(RuntimeError):
    """Raised when a comparator finds the expected and actual values unequal.

    Carries both original values (not copied) together with their rendered
    text forms. The diff is recomputed from the stored text on every call.
    """

    def __init__(
        self,
        expected: Any,
        actual: Any,
        expected_as_string: str,
        actual_as_string: str,
        identical: bool = False,
        message: str = "",
    ) -> None:
        super().__init__(message)
        self._expected = expected
        self._actual = actual
        self._expected_as_string = expected_as_string
        self._actual_as_string = actual_as_string
        self._identical = identical
        self._message = message

    @property
    def expected(self) -> Any:
        return self._expected

    @property
    def actual(self) -> Any:
        return self._actual

    @property
    def expected_as_string(self) -> str:
        return self._expected_as_string

    @property
    def actual_as_string(self) -> str:
        return self._actual_as_string

    @property
    def identical(self) -> bool:
        return self._identical

    @property
    def message(self) -> str:
        return self._message

    def diff(self) -> str:
        if not self._expected_as_string and not self._actual_as_string:
            return ""
        return render_unified_diff(
            self._expected_as_string,
            self._actual_as_string,
            header=DEFAULT_DIFF_HEADER,
        )

    def to_string(self) -> str:
        return self._message + self.diff()

    def __str__(self) -> str:
        return self.to_string()

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self._message,
            "identical": self._identical,
            "expected_as_string": self._expected_as_string,
            "actual_as_string": self._actual_as_string,
            "diff": self.diff(),
        }
