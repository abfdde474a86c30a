"""d2-fence: render D2 diagram blocks found in documents through the d2 CLI."""

from d2_fence.config import DEFAULT_ANIMATE_INTERVAL, Configuration, InlineConfig
from d2_fence.generator import build_args, generate_diagram
from d2_fence.markdown import render_block, render_markdown
from d2_fence.merge import ParsedBlock, parse_config
from d2_fence.parsers import parse_directives, parse_inline_config
from d2_fence.syntax import extract_d2_config, find_block_bounds, has_composition, strip_comments
from d2_fence.types import FileType, Layout, Theme

__all__ = [
    "DEFAULT_ANIMATE_INTERVAL",
    "Configuration",
    "FileType",
    "InlineConfig",
    "Layout",
    "ParsedBlock",
    "Theme",
    "build_args",
    "extract_d2_config",
    "find_block_bounds",
    "generate_diagram",
    "has_composition",
    "parse_config",
    "parse_directives",
    "parse_inline_config",
    "render_block",
    "render_markdown",
    "strip_comments",
]
