"""Base renderer protocol."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class Renderer(Protocol):
    """Protocol that all renderers must implement."""

    def render(self, path: Path) -> str:
        """Render an image file produced by d2 to an HTML fragment."""
        ...
