"""String-to-value coercions shared by the directive and inline parsers.

Integer and float parsing read the longest numeric prefix and give NaN when
there is none. NaN is returned, not replaced by a default, so a typo in a
directive reaches the ``d2`` command line instead of silently vanishing.
"""

from __future__ import annotations

import math
import re

_INT_PREFIX_RE = re.compile(r"\s*([+-]?[0-9]+)")
_FLOAT_PREFIX_RE = re.compile(r"\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_RADIX_RE = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_INFINITY_RE = re.compile(r"[+-]?Infinity")


def parse_int(text: str) -> int | float:
    """Leading integer of ``text``; NaN when it does not start with one."""
    m = _INT_PREFIX_RE.match(text)
    if m is None:
        return math.nan
    return int(m.group(1))


def parse_float(text: str) -> float:
    """Leading decimal number of ``text``; NaN when it does not start with one."""
    m = _FLOAT_PREFIX_RE.match(text)
    if m is None:
        return math.nan
    return float(m.group(1))


def parse_number(text: str) -> int | float | None:
    """Whole-string number, or None when ``text`` is not numeric.

    Blank text counts as 0. Accepts ``0x``/``0o``/``0b`` prefixes and
    ``Infinity``. Integral values come back as ``int``.
    """
    stripped = text.strip()
    if not stripped:
        return 0
    if _RADIX_RE.fullmatch(stripped):
        return int(stripped, 0)
    if _INFINITY_RE.fullmatch(stripped):
        return -math.inf if stripped.startswith("-") else math.inf
    if not _DECIMAL_RE.fullmatch(stripped):
        return None
    value = float(stripped)
    if value.is_integer():
        return int(value)
    return value


def parse_bool(text: str) -> bool:
    return text == "true"


def strip_quotes(text: str) -> str:
    """Remove one pair of matching surrounding quotes, if present."""
    if len(text) < 2:
        return text
    if text[0] == text[-1] and text[0] in ("'", '"'):
        return text[1:-1]
    return text
