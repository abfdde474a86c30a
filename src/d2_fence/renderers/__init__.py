"""HTML renderers for images produced by d2."""

from d2_fence.renderers.base import Renderer
from d2_fence.renderers.html import ImageRenderer, SvgRenderer, render_output

__all__ = [
    "ImageRenderer",
    "Renderer",
    "SvgRenderer",
    "render_output",
]
