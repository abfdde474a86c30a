"""Directive header parser.

A diagram block may open with a header of ``d2`` command-line flags::

    \"\"\"
    --layout=elk
    --theme 200
    --sketch
    \"\"\"
    a -> b

The header must start at the very first character with three double quotes
followed by a newline, and runs to the next three double quotes.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from d2_fence.config import Configuration
from d2_fence.parsers.coerce import parse_bool, parse_float, parse_int, parse_number
from d2_fence.types import lookup_file_type, lookup_layout

_HEADER_RE = re.compile(r'\A"""\n(.*?)"""\s*\n?', re.DOTALL)
_FLAG_PREFIX = "--"
_IMPLIED_VALUE = "true"

# directive key -> (Configuration field, coercion). A coercion returning None
# leaves the field unset.
_DIRECTIVES: dict[str, tuple[str, Callable[[str], Any]]] = {
    "--force-appendix": ("force_appendix", parse_bool),
    "--layout": ("layout", lookup_layout),
    "--theme": ("theme", parse_number),
    "--dark-theme": ("dark_theme", parse_number),
    "--pad": ("pad", parse_int),
    "--animate-interval": ("animate_interval", parse_int),
    "--timeout": ("timeout", parse_int),
    "--sketch": ("sketch", parse_bool),
    "--center": ("center", parse_bool),
    "--scale": ("scale", parse_float),
    "--target": ("target", str),
    "--stdout-format": ("stdout_format", lookup_file_type),
    "--directory": ("directory", str),
}


def split_directive(line: str) -> tuple[str, str] | None:
    """Split one header line into ``(key, raw_value)``.

    Returns None for lines that are not flags. ``--key=value`` splits at the
    first ``=``, ``--key value`` at whitespace, and a bare ``--key`` gets the
    value ``"true"``.
    """
    line = line.strip()
    if not line.startswith(_FLAG_PREFIX):
        return None
    if "=" in line:
        key, _, value = line.partition("=")
        return (key.strip(), value.strip())
    parts = line.split()
    if len(parts) < 2:
        return (parts[0], _IMPLIED_VALUE)
    return (parts[0], parts[1])


class DirectiveHeaderParser:
    """Reads the flag header off the top of a diagram block."""

    def split_header(self, src: str) -> tuple[str | None, str]:
        """Return ``(header_content, remaining_code)``; content is None without a header."""
        m = _HEADER_RE.match(src)
        if m is None or not m.group(1):
            return (None, src)
        return (m.group(1), src[m.end() :].strip())

    def read_directives(self, content: str) -> dict[str, str]:
        directives: dict[str, str] = {}
        for line in content.strip().split("\n"):
            pair = split_directive(line)
            if pair is None:
                continue
            key, value = pair
            directives[key] = value
        return directives

    def to_configuration(self, directives: dict[str, str]) -> Configuration:
        config = Configuration()
        for key, raw in directives.items():
            entry = _DIRECTIVES.get(key)
            if entry is None:
                continue
            field_name, coerce = entry
            setattr(config, field_name, coerce(raw))
        return config

    def parse(self, src: str) -> tuple[Configuration, str]:
        content, code = self.split_header(src)
        if content is None:
            return (Configuration(), code)
        return (self.to_configuration(self.read_directives(content)), code)


def parse_directives(src: str) -> tuple[Configuration, str]:
    """Parse the directive header of a diagram block.

    Args:
        src: Raw diagram block text.

    Returns:
        The directive configuration and the block with the header removed and
        trimmed. Without a header, an empty configuration and ``src`` as is.
    """
    return DirectiveHeaderParser().parse(src)
