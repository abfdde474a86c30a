"""Exceptions raised around the ``d2`` executable.

The parsing core never raises; only rendering can fail.
"""

from __future__ import annotations

from pathlib import Path


class D2FenceError(Exception):
    pass


class RenderError(D2FenceError):
    """``d2`` could not produce the requested diagram."""

    def __init__(self, message: str, stderr: str = ""):
        super().__init__(message)
        self.stderr = stderr


class MissingOutputError(RenderError):
    def __init__(self, path: Path):
        super().__init__(f"image file does not exist: {path}")
        self.path = path
