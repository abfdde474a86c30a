"""Embed d2 output files into HTML."""

from __future__ import annotations

import base64
import logging
import re
from pathlib import Path

from d2_fence.errors import MissingOutputError
from d2_fence.renderers.base import Renderer
from d2_fence.types import FileType, media_type

logger = logging.getLogger(__name__)

# Bare <style>/<script> inside inlined SVG confuse HTML templating layers,
# so they are moved into the svg: namespace.
_TAG_RENAMES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"<style", re.IGNORECASE), "<svg:style"),
    (re.compile(r"</style>", re.IGNORECASE), "</svg:style>"),
    (re.compile(r"<script", re.IGNORECASE), "<svg:script"),
    (re.compile(r"</script>", re.IGNORECASE), "</svg:script>"),
]
_XML_DECLARATION_RE = re.compile(r"<\?xml[^>]*\?>", re.IGNORECASE)


def _require(path: Path) -> None:
    if not path.exists():
        logger.error("image file does not exist: %s", path)
        raise MissingOutputError(path)


class SvgRenderer:
    """Inlines the SVG markup so links and tooltips stay interactive."""

    def render(self, path: Path) -> str:
        _require(path)
        svg = path.read_text(encoding="utf-8")
        for pattern, replacement in _TAG_RENAMES:
            svg = pattern.sub(replacement, svg)
        svg = _XML_DECLARATION_RE.sub("", svg)
        return f'<div class="d2-diagram">{svg}</div>'


class ImageRenderer:
    """Embeds the image as a base64 data URI."""

    def __init__(self, file_type: FileType) -> None:
        self.file_type = file_type

    def render(self, path: Path) -> str:
        _require(path)
        data = base64.b64encode(path.read_bytes()).decode("ascii")
        uri = f"data:{media_type(self.file_type)};base64,{data}"
        return f'<img src="{uri}" class="d2-diagram" alt="D2 Diagram" />'


def render_output(path: Path, file_type: FileType) -> str:
    """Pick the renderer for ``file_type`` and render ``path``."""
    renderer: Renderer = SvgRenderer() if file_type is FileType.SVG else ImageRenderer(file_type)
    return renderer.render(path)
