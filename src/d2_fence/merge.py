"""Combine every configuration source of a diagram block.

Precedence, later wins field by field:

1. caller defaults
2. directive header
3. embedded ``vars.d2-config`` block
4. ``animate_interval`` falls back to ``DEFAULT_ANIMATE_INTERVAL`` when the
   code declares a composition and nothing set it.
"""

from __future__ import annotations

from dataclasses import dataclass

from d2_fence.config import DEFAULT_ANIMATE_INTERVAL, Configuration
from d2_fence.parsers.directives import parse_directives
from d2_fence.parsers.inline import parse_inline_config
from d2_fence.syntax.blocks import has_composition
from d2_fence.syntax.scanner import strip_comments


@dataclass
class ParsedBlock:
    """A diagram block ready for rendering."""

    config: Configuration
    code: str  # header and comments removed, d2-config block kept
    source: str  # header removed, comments kept


def merge_configs(*configs: Configuration) -> Configuration:
    merged = Configuration()
    for config in configs:
        merged = merged.merged_with(config)
    return merged


def parse_config(content: str, default: Configuration | None = None) -> ParsedBlock:
    """Resolve the final configuration of a raw diagram block.

    Args:
        content: Raw fenced block text, possibly starting with a directive header.
        default: Caller-supplied defaults; None means no defaults.

    Returns:
        The merged configuration along with the cleaned code.
    """
    directive_config, source = parse_directives(content)
    code = strip_comments(source)
    inline_config = parse_inline_config(code).to_configuration()

    config = merge_configs(default or Configuration(), directive_config, inline_config)
    if config.animate_interval is None and has_composition(code):
        config.animate_interval = DEFAULT_ANIMATE_INTERVAL
    return ParsedBlock(config=config, code=code, source=source)
