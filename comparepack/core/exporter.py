"""Human-readable, diff-friendly rendering of arbitrary values."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

INDENT = "    "
RECURSION_TOKEN = "*RECURSION*"


def export(value: Any, *, indentation: int = 0) -> str:
    """Render ``value`` as deterministic multi-line text.

    Mapping keys and set members are sorted, strings keep their line breaks
    so a diff of two exports stays line oriented, and reference cycles are
    rendered as ``*RECURSION*``.
    """
    return _export(value, indentation=indentation, active=set())


def export_text(value: Any) -> str:
    """Render ``value`` with ``export`` as newline-terminated text for diffing."""
    return export(value) + "\n"


def shortened_export(value: Any, *, max_length: int = 40) -> str:
    """Render ``value`` on a single line, truncating long output."""
    if isinstance(value, Mapping):
        text = "{...}" if value else "{}"
    elif isinstance(value, list):
        text = "[...]" if value else "[]"
    elif isinstance(value, tuple):
        text = "(...)" if value else "()"
    elif isinstance(value, (set, frozenset)):
        text = f"{type(value).__name__}(...)"
    elif object_state(value) is not None and not _is_scalar(value):
        text = f"{type(value).__qualname__}(...)"
    else:
        text = export(value).replace("\n", "\\n")

    if len(text) > max_length:
        text = f"{text[:30]}...{text[-7:]}"
    return text


def object_state(value: Any) -> dict[str, Any] | None:
    """Return the attribute state of an object, or ``None`` if it has none.

    Combines ``__dict__`` with any ``__slots__`` declared along the class
    hierarchy. Slots that were never assigned are left out.
    """
    instance_dict = getattr(value, "__dict__", None)
    has_state = isinstance(instance_dict, dict)
    state: dict[str, Any] = dict(instance_dict) if has_state else {}

    for cls in type(value).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in {"__dict__", "__weakref__"}:
                continue
            has_state = True
            try:
                state.setdefault(slot, getattr(value, slot))
            except AttributeError:
                continue

    return state if has_state else None


def _is_scalar(value: Any) -> bool:
    return value is None or isinstance(value, (str, bytes, bytearray, bool, int, float, complex))


def _export(value: Any, *, indentation: int, active: set[int]) -> str:
    if isinstance(value, str):
        return _export_string(value)

    if _is_scalar(value):
        return repr(value)

    if id(value) in active:
        return RECURSION_TOKEN

    active.add(id(value))
    try:
        if isinstance(value, Mapping):
            entries = [
                (_export(key, indentation=indentation + 1, active=active) + ": ", value[key])
                for key in sorted(value.keys(), key=lambda raw: str(raw))
            ]
            return _export_block("{", "}", entries, indentation=indentation, active=active)

        if isinstance(value, list):
            return _export_block("[", "]", [("", item) for item in value], indentation=indentation, active=active)

        if isinstance(value, tuple):
            return _export_block("(", ")", [("", item) for item in value], indentation=indentation, active=active)

        if isinstance(value, (set, frozenset)):
            items = sorted(value, key=lambda item: export(item))
            opening = "{" if isinstance(value, set) else "frozenset({"
            closing = "}" if isinstance(value, set) else "})"
            if not items:
                return "set()" if isinstance(value, set) else "frozenset()"
            return _export_block(opening, closing, [("", item) for item in items], indentation=indentation, active=active)

        state = object_state(value)
        if state is None:
            return repr(value)
        entries = [(f"{name}=", state[name]) for name in sorted(state)]
        return _export_block(f"{type(value).__qualname__}(", ")", entries, indentation=indentation, active=active)
    finally:
        active.discard(id(value))


def _export_block(
    opening: str,
    closing: str,
    entries: list[tuple[str, Any]],
    *,
    indentation: int,
    active: set[int],
) -> str:
    if not entries:
        return f"{opening}{closing}"

    inner = INDENT * (indentation + 1)
    lines = [opening]
    for label, item in entries:
        rendered = _export(item, indentation=indentation + 1, active=active)
        lines.append(f"{inner}{label}{rendered},")
    lines.append(f"{INDENT * indentation}{closing}")
    return "\n".join(lines)


def _export_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"
