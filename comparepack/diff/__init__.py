"""Diff subsystem for CompareKit."""

from comparepack.diff.failure import ComparisonFailure
from comparepack.diff.renderer import (
    DEFAULT_DIFF_HEADER,
    NO_NEWLINE_MARKER,
    render_unified_diff,
)

__all__ = [
    "DEFAULT_DIFF_HEADER",
    "NO_NEWLINE_MARKER",
    "ComparisonFailure",
    "render_unified_diff",
]
