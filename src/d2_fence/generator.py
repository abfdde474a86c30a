"""Run the ``d2`` executable for a parsed diagram block.

Outputs are cached by content: the file name carries a short hash of the file
type, the projected flags, and the code, so an unchanged block is never
rendered twice.
"""

from __future__ import annotations

import hashlib
import logging
import math
import os
import subprocess
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from d2_fence.config import Configuration
from d2_fence.errors import RenderError
from d2_fence.types import FileType

logger = logging.getLogger(__name__)

DEFAULT_DIRECTORY = "d2-diagrams"
DEFAULT_EXECUTABLE = "d2"
EXECUTABLE_ENV = "D2_BIN"


@dataclass
class RenderedDiagram:
    path: Path
    file_type: FileType


def short_hash(content: str, length: int = 7) -> str:
    return hashlib.sha256(content.encode("utf-8")).hexdigest()[:length]


def _format_value(value: object) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def build_args(config: Configuration, input_path: str = "", output_path: str = "") -> list[str]:
    """Project a configuration onto ``d2`` command-line arguments.

    Args:
        config: Resolved configuration.
        input_path: Optional D2 source path placed first.
        output_path: Optional output path placed after the input.

    Returns:
        The argument list, without the executable name.
    """
    args: list[str] = []
    if input_path:
        args.append(input_path)
    if output_path:
        args.append(output_path)

    if config.force_appendix is True:
        args.append("--force-appendix")
    valued = [
        ("--layout", config.layout),
        ("--theme", config.theme),
        ("--dark-theme", config.dark_theme),
        ("--pad", config.pad),
        ("--animate-interval", config.animate_interval),
        ("--timeout", config.timeout),
    ]
    for flag, value in valued:
        if value is not None:
            args.append(f"{flag}={_format_value(value)}")
    if config.sketch is True:
        args.append("--sketch")
    if config.center is True:
        args.append("--center")
    if config.scale is not None:
        args.append(f"--scale={_format_value(config.scale)}")
    if config.target is not None:
        args.append(f"--target={config.target}")

    # SVGs are inlined into HTML, where an XML declaration is invalid.
    if config.stdout_format is FileType.SVG:
        args.append("--no-xml-tag")
    return args


def resolve_executable(executable: str | None = None) -> str:
    if executable:
        return executable
    return os.environ.get(EXECUTABLE_ENV, DEFAULT_EXECUTABLE)


def read_diagram_content(content: str, src: str | None = None) -> str | None:
    """Return the trimmed fence body, falling back to the file at ``src``.

    Returns None when neither gives any text or ``src`` is not a readable file.
    """
    content = content.strip()
    if content:
        return content
    if not src:
        return None
    path = Path(src)
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding="utf-8").strip()
    except OSError as e:
        logger.error("cannot read D2 file '%s': %s", src, e)
        return None
    return text or None


def output_path_for(code: str, config: Configuration) -> Path:
    """Cache path of the image for ``code`` under ``config``."""
    file_type = config.stdout_format or FileType.default()
    args = build_args(config)
    file_id = short_hash(f"{file_type.value} {' '.join(args)} {code}")
    return Path(config.directory or DEFAULT_DIRECTORY) / f"d2-diagram-{file_id}.{file_type.value}"


def generate_diagram(code: str, config: Configuration, executable: str | None = None) -> RenderedDiagram:
    """Render ``code`` with ``d2`` unless a cached image already exists.

    Raises:
        RenderError: If ``d2`` is missing, exits non-zero, or writes no output.
    """
    file_type = config.stdout_format or FileType.default()
    image_path = output_path_for(code, config)
    image_path.parent.mkdir(parents=True, exist_ok=True)

    if image_path.exists():
        logger.debug("cache hit: %s", image_path)
        return RenderedDiagram(path=image_path, file_type=file_type)

    with tempfile.NamedTemporaryFile(
        "w", suffix=".d2", dir=image_path.parent, delete=False, encoding="utf-8"
    ) as temp_file:
        temp_file.write(code)
    temp_path = Path(temp_file.name)

    command = [resolve_executable(executable), str(temp_path), str(image_path), *build_args(config)]
    logger.debug("running: %s", " ".join(command))
    try:
        result = subprocess.run(command, capture_output=True, text=True)
    except OSError as e:
        raise RenderError(f"cannot run '{command[0]}': {e}") from e
    finally:
        temp_path.unlink(missing_ok=True)

    if result.returncode != 0:
        logger.error("failed to generate D2 diagram:\n%s", result.stderr)
        raise RenderError(f"d2 command failed: {result.stderr}", stderr=result.stderr)
    if not image_path.exists():
        message = f"d2 completed successfully but output file was not created: {image_path}"
        logger.error(message)
        raise RenderError(message, stderr=result.stderr)

    return RenderedDiagram(path=image_path, file_type=file_type)
