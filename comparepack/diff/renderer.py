"""Line-oriented unified diff rendering."""

from __future__ import annotations

import difflib

DEFAULT_DIFF_HEADER = "\n--- Expected\n+++ Actual\n"
NO_NEWLINE_MARKER = "\\ No newline at end of file\n"


def render_unified_diff(
    expected_text: str,
    actual_text: str,
    *,
    header: str = DEFAULT_DIFF_HEADER,
    context_lines: int = 3,
) -> str:
    """Render a unified diff of two texts below a fixed header.

    Returns an empty string when both texts are empty. Equal texts render
    the header alone.
    """
    if not expected_text and not actual_text:
        return ""

    expected_lines = expected_text.splitlines(keepends=True)
    actual_lines = actual_text.splitlines(keepends=True)
    matcher = difflib.SequenceMatcher(None, expected_lines, actual_lines, autojunk=False)

    parts: list[str] = [header]
    for group in matcher.get_grouped_opcodes(max(0, context_lines)):
        if all(tag == "equal" for tag, *_ in group):
            continue

        parts.append(_hunk_header(group))
        for tag, i1, i2, j1, j2 in group:
            if tag == "equal":
                parts.extend(_prefixed(" ", expected_lines[i1:i2]))
                continue
            if tag in {"replace", "delete"}:
                parts.extend(_prefixed("-", expected_lines[i1:i2]))
            if tag in {"replace", "insert"}:
                parts.extend(_prefixed("+", actual_lines[j1:j2]))

    return "".join(parts)


def _hunk_header(group: list[tuple[str, int, int, int, int]]) -> str:
    first, last = group[0], group[-1]
    expected_range = _format_range(first[1], last[2])
    actual_range = _format_range(first[3], last[4])
    return f"@@ -{expected_range} +{actual_range} @@\n"


def _format_range(start: int, stop: int) -> str:
    # Same convention as GNU diff: empty ranges point at the preceding line.
    beginning = start + 1
    length = stop - start
    if length == 1:
        return f"{beginning}"
    if not length:
        beginning -= 1
    return f"{beginning},{length}"


def _prefixed(prefix: str, lines: list[str]) -> list[str]:
    rendered: list[str] = []
    for line in lines:
        if line.endswith("\n"):
            rendered.append(f"{prefix}{line}")
        else:
            rendered.append(f"{prefix}{line}\n{NO_NEWLINE_MARKER}")
    return rendered
