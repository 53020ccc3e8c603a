"""Comparison option bundle passed through comparator dispatch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

ProcessedPairs = set[tuple[int, int]]


@dataclass(slots=True)
class ComparisonOptions:
    """Options recognised by comparators.

    ``processed`` is the cycle guard for one top-level comparison. Leave it
    as ``None`` and a fresh set is created per comparison.
    """

    delta: float = 0.0
    canonicalize: bool = False
    ignore_case: bool = False
    processed: ProcessedPairs | None = None

    def to_kwargs(self) -> dict[str, Any]:
        return {
            "delta": self.delta,
            "canonicalize": self.canonicalize,
            "ignore_case": self.ignore_case,
            "processed": set() if self.processed is None else self.processed,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "delta": self.delta,
            "canonicalize": self.canonicalize,
            "ignore_case": self.ignore_case,
        }
