"""Parser for the ``vars: { d2-config: { ... } }`` block embedded in D2 source."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from d2_fence.config import InlineConfig
from d2_fence.parsers.coerce import parse_bool, parse_int, strip_quotes
from d2_fence.syntax.blocks import extract_d2_config

_KEYS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "layout-engine": ("layout_engine", str),
    "theme-id": ("theme_id", parse_int),
    "dark-theme-id": ("dark_theme_id", parse_int),
    "sketch": ("sketch", parse_bool),
    "center": ("center", parse_bool),
    "pad": ("pad", parse_int),
}


class InlineConfigParser:
    """Reads ``key: value`` lines out of the embedded d2-config block."""

    def parse(self, code: str) -> InlineConfig:
        config = InlineConfig()
        for line in extract_d2_config(code).split("\n"):
            if not line:
                continue
            parts = line.split(":")
            if len(parts) != 2:
                continue
            entry = _KEYS.get(parts[0].strip())
            if entry is None:
                continue
            field_name, coerce = entry
            setattr(config, field_name, coerce(strip_quotes(parts[1].strip())))
        return config


def parse_inline_config(code: str) -> InlineConfig:
    """Parse the embedded d2-config block of comment-free D2 code."""
    return InlineConfigParser().parse(code)
