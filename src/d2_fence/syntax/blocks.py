"""Brace-bounded block lookup over comment-free D2 source.

None of this is quote-aware: callers pass code that already went through
``strip_comments``. A brace inside a string value can still throw the depth
count off.
"""

from __future__ import annotations

import re

VARS_MARKER = "vars:"
D2_CONFIG_MARKER = "d2-config:"

_COMPOSITION_RE = re.compile(r"\b(layers|scenarios|steps)\s*:\s*\{", re.IGNORECASE)


def find_block_bounds(code: str, start: int = 0) -> tuple[int, int] | None:
    """Locate the body of the first ``{...}`` block at or after ``start``.

    Returns the half-open ``(begin, end)`` span strictly between the opening
    brace and its matching closing brace, or None when there is no opening
    brace or it is never balanced.
    """
    depth = 0
    begin = -1
    for i in range(start, len(code)):
        ch = code[i]
        if ch == "{":
            if depth == 0:
                begin = i + 1
            depth += 1
        elif ch == "}" and begin != -1:
            depth -= 1
            if depth == 0:
                return (begin, i)
    return None


def _marker_body(code: str, marker: str) -> str | None:
    offset = code.find(marker)
    if offset == -1:
        return None
    bounds = find_block_bounds(code, offset)
    if bounds is None:
        return None
    begin, end = bounds
    return code[begin:end]


def extract_d2_config(code: str) -> str:
    """Return the body of ``vars: { d2-config: { ... } }``, or "" if absent.

    Both markers are found by plain text search, so the first occurrence wins
    even when it sits somewhere unrelated.
    """
    vars_body = _marker_body(code, VARS_MARKER)
    if vars_body is None:
        return ""
    return _marker_body(vars_body, D2_CONFIG_MARKER) or ""


def has_composition(code: str) -> bool:
    """True if the code declares ``layers``, ``scenarios`` or ``steps`` boards."""
    return _COMPOSITION_RE.search(code) is not None
