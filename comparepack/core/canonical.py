"""Deterministic canonicalization helpers for CompareKit."""

from __future__ import annotations

from collections.abc import Mapping
import json
import math
from typing import Any

from comparepack.core.exporter import object_state

RECURSION_MARKER = "*RECURSION*"


def canonicalize(value: Any, *, ignore_case: bool = False) -> Any:
    """Normalize values to an order-independent, JSON-compatible representation."""
    return _canonicalize(value, ignore_case=ignore_case, active=set())


def canonical_json(value: Any, *, ignore_case: bool = False) -> str:
    """Serialize a value to stable canonical JSON."""
    return json.dumps(
        canonicalize(value, ignore_case=ignore_case),
        ensure_ascii=True,
        separators=(",", ":"),
        sort_keys=True,
    )


def stable_sort_key(value: Any, *, ignore_case: bool = False) -> str:
    """Sort key that orders arbitrary values consistently across runs."""
    return canonical_json(value, ignore_case=ignore_case)


def canonical_sequence(values: Any, *, ignore_case: bool = False) -> list[Any]:
    """Return the items of ``values`` sorted by their canonical form."""
    return sorted(values, key=lambda item: stable_sort_key(item, ignore_case=ignore_case))


def _canonicalize(value: Any, *, ignore_case: bool, active: set[int]) -> Any:
    if isinstance(value, str):
        return value.lower() if ignore_case else value

    if isinstance(value, bool) or value is None:
        return value

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return repr(value)
        return float(f"{value:.12g}")

    if isinstance(value, (bytes, bytearray)):
        return value.hex()

    if id(value) in active:
        return RECURSION_MARKER

    active.add(id(value))
    try:
        if isinstance(value, Mapping):
            normalized: dict[str, Any] = {}
            for key in sorted(value.keys(), key=lambda raw: str(raw)):
                normalized[str(key)] = _canonicalize(value[key], ignore_case=ignore_case, active=active)
            return normalized

        if isinstance(value, (list, tuple)):
            return [_canonicalize(item, ignore_case=ignore_case, active=active) for item in value]

        if isinstance(value, (set, frozenset)):
            items = [_canonicalize(item, ignore_case=ignore_case, active=active) for item in value]
            items.sort(key=_json_key)
            return items

        state = object_state(value)
        if state is None:
            return f"{type(value).__qualname__}:{value!r}"
        return {
            "__class__": type(value).__qualname__,
            "state": {
                name: _canonicalize(state[name], ignore_case=ignore_case, active=active)
                for name in sorted(state)
            },
        }
    finally:
        active.discard(id(value))


def _json_key(item: Any) -> str:
    return json.dumps(item, ensure_ascii=True, separators=(",", ":"), sort_keys=True)
