"""Core value primitives for CompareKit."""

from comparepack.core.canonical import (
    canonical_json,
    canonical_sequence,
    canonicalize,
    stable_sort_key,
)
from comparepack.core.exporter import export, export_text, object_state, shortened_export
from comparepack.core.options import ComparisonOptions, ProcessedPairs

__all__ = [
    "ComparisonOptions",
    "ProcessedPairs",
    "canonicalize",
    "canonical_json",
    "canonical_sequence",
    "stable_sort_key",
    "export",
    "export_text",
    "shortened_export",
    "object_state",
]
