"""Lexical layer: comment stripping and brace-block lookup."""

from d2_fence.syntax.blocks import extract_d2_config, find_block_bounds, has_composition
from d2_fence.syntax.scanner import strip_comments

__all__ = [
    "extract_d2_config",
    "find_block_bounds",
    "has_composition",
    "strip_comments",
]
