"""Configuration sources found inside a diagram block."""

from d2_fence.parsers.directives import DirectiveHeaderParser, parse_directives
from d2_fence.parsers.inline import InlineConfigParser, parse_inline_config

__all__ = [
    "DirectiveHeaderParser",
    "InlineConfigParser",
    "parse_directives",
    "parse_inline_config",
]
