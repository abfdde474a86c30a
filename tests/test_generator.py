"""Tests for d2_fence.generator — argument projection and the d2 subprocess."""

import math
import sys
from pathlib import Path

import pytest

from d2_fence.config import Configuration
from d2_fence.errors import RenderError
from d2_fence.generator import (
    EXECUTABLE_ENV,
    build_args,
    generate_diagram,
    output_path_for,
    read_diagram_content,
    resolve_executable,
    short_hash,
)
from d2_fence.types import FileType, Layout

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="fake d2 is a shell script")


class TestBuildArgs:
    def test_all_fields(self):
        config = Configuration(
            force_appendix=True,
            layout=Layout.ELK,
            theme=200,
            dark_theme=201,
            pad=0,
            animate_interval=1200,
            timeout=30,
            sketch=True,
            center=True,
            scale=0.5,
            target="*",
            stdout_format=FileType.SVG,
        )
        assert build_args(config) == [
            "--force-appendix",
            "--layout=elk",
            "--theme=200",
            "--dark-theme=201",
            "--pad=0",
            "--animate-interval=1200",
            "--timeout=30",
            "--sketch",
            "--center",
            "--scale=0.5",
            "--target=*",
            "--no-xml-tag",
        ]

    def test_empty(self):
        assert build_args(Configuration()) == []

    def test_false_flags_are_omitted(self):
        assert build_args(Configuration(force_appendix=False, sketch=False, center=False)) == []

    def test_no_xml_tag_only_for_svg(self):
        assert build_args(Configuration(stdout_format=FileType.PNG)) == []
        assert build_args(Configuration(stdout_format=FileType.BASE64_SVG)) == []

    def test_paths_come_first(self):
        assert build_args(Configuration(sketch=True), "in.d2", "out.svg") == ["in.d2", "out.svg", "--sketch"]

    def test_empty_target_is_kept(self):
        assert build_args(Configuration(target="")) == ["--target="]

    def test_number_formatting(self):
        assert build_args(Configuration(pad=math.nan)) == ["--pad=NaN"]
        assert build_args(Configuration(scale=1.0)) == ["--scale=1"]


def test_short_hash():
    assert len(short_hash("a -> b")) == 7
    assert short_hash("a -> b") == short_hash("a -> b")
    assert short_hash("a -> b") != short_hash("a -> c")
    assert len(short_hash("x", length=12)) == 12


def test_output_path_depends_on_config(tmp_path: Path):
    base = Configuration(directory=str(tmp_path))
    svg = output_path_for("a -> b", base)
    assert svg.parent == tmp_path
    assert svg.name.startswith("d2-diagram-") and svg.suffix == ".svg"
    assert output_path_for("a -> b", Configuration(directory=str(tmp_path), sketch=True)) != svg
    assert output_path_for("a -> b", Configuration(directory=str(tmp_path), stdout_format=FileType.PNG)).suffix == ".png"


def test_resolve_executable(monkeypatch):
    monkeypatch.delenv(EXECUTABLE_ENV, raising=False)
    assert resolve_executable() == "d2"
    monkeypatch.setenv(EXECUTABLE_ENV, "/opt/d2/bin/d2")
    assert resolve_executable() == "/opt/d2/bin/d2"
    assert resolve_executable("custom-d2") == "custom-d2"


class TestReadDiagramContent:
    def test_inline_content(self):
        assert read_diagram_content("  a -> b\n") == "a -> b"

    def test_external_file(self, tmp_path: Path):
        src = tmp_path / "diagram.d2"
        src.write_text("x -> y\n")
        assert read_diagram_content("", str(src)) == "x -> y"

    def test_nothing(self, tmp_path: Path):
        assert read_diagram_content("  ") is None
        assert read_diagram_content("", str(tmp_path)) is None
        assert read_diagram_content("", str(tmp_path / "missing.d2")) is None


@posix_only
class TestGenerateDiagram:
    def test_renders_and_cleans_up(self, tmp_path: Path, fake_d2: str):
        out_dir = tmp_path / "out"
        result = generate_diagram("a -> b", Configuration(directory=str(out_dir)), fake_d2)
        assert result.file_type is FileType.SVG
        assert result.path.read_text() == "<svg>a -> b</svg>"
        assert [p.name for p in out_dir.iterdir()] == [result.path.name]

    def test_passes_flags(self, tmp_path: Path, fake_d2: str, d2_log: Path):
        config = Configuration(directory=str(tmp_path / "out"), layout=Layout.ELK, sketch=True)
        generate_diagram("a -> b", config, fake_d2)
        assert d2_log.read_text().split()[2:] == ["--layout=elk", "--sketch"]

    def test_cache_hit_skips_d2(self, tmp_path: Path, fake_d2: str, d2_log: Path):
        config = Configuration(directory=str(tmp_path / "out"))
        first = generate_diagram("a -> b", config, fake_d2)
        second = generate_diagram("a -> b", config, fake_d2)
        assert first == second
        assert len(d2_log.read_text().splitlines()) == 1

    def test_failure_raises(self, tmp_path: Path, failing_d2: str):
        out_dir = tmp_path / "out"
        with pytest.raises(RenderError) as excinfo:
            generate_diagram("a -> ", Configuration(directory=str(out_dir)), failing_d2)
        assert "boom: bad syntax" in excinfo.value.stderr
        assert list(out_dir.iterdir()) == []

    def test_missing_output_raises(self, tmp_path: Path, silent_d2: str):
        with pytest.raises(RenderError, match="output file was not created"):
            generate_diagram("a -> b", Configuration(directory=str(tmp_path / "out")), silent_d2)

    def test_missing_executable_raises(self, tmp_path: Path):
        with pytest.raises(RenderError, match="cannot run"):
            generate_diagram("a -> b", Configuration(directory=str(tmp_path / "out")), str(tmp_path / "no-d2"))
