"""Tests for d2_fence.renderers — HTML embedding."""

from pathlib import Path

import pytest

from d2_fence.errors import MissingOutputError, RenderError
from d2_fence.renderers import ImageRenderer, SvgRenderer, render_output
from d2_fence.types import FileType


def test_svg_is_inlined(tmp_path: Path):
    svg = tmp_path / "d.svg"
    svg.write_text('<?xml version="1.0" encoding="utf-8"?><svg><STYLE>a{}</STYLE><script>x()</script></svg>')
    assert SvgRenderer().render(svg) == (
        '<div class="d2-diagram"><svg><svg:style>a{}</svg:style><svg:script>x()</svg:script></svg></div>'
    )


def test_png_becomes_data_uri(tmp_path: Path):
    png = tmp_path / "d.png"
    png.write_bytes(b"\x89PNG")
    assert ImageRenderer(FileType.PNG).render(png) == (
        '<img src="data:image/png;base64,iVBORw==" class="d2-diagram" alt="D2 Diagram" />'
    )


def test_base64_svg_media_type(tmp_path: Path):
    path = tmp_path / "d.base64_svg"
    path.write_text("<svg/>")
    assert "data:image/svg+xml;base64," in ImageRenderer(FileType.BASE64_SVG).render(path)


def test_missing_file(tmp_path: Path):
    with pytest.raises(MissingOutputError) as excinfo:
        SvgRenderer().render(tmp_path / "nope.svg")
    assert isinstance(excinfo.value, RenderError)
    assert excinfo.value.path == tmp_path / "nope.svg"


def test_render_output_dispatch(tmp_path: Path):
    svg = tmp_path / "d.svg"
    svg.write_text("<svg/>")
    assert render_output(svg, FileType.SVG) == '<div class="d2-diagram"><svg/></div>'
    gif = tmp_path / "d.gif"
    gif.write_bytes(b"GIF89a")
    assert render_output(gif, FileType.GIF).startswith('<img src="data:image/gif;base64,')
