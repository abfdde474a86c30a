"""Configuration records for d2-fence.

``Configuration`` mirrors the flags of the ``d2`` command line. Every field
defaults to ``None`` which means "unset", so a later source can override it
without clobbering an explicit ``False`` or ``0`` from an earlier one.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any

from d2_fence.types import FileType, Layout, lookup_layout

# Applied to compositions (layers/scenarios/steps) when no interval was given.
DEFAULT_ANIMATE_INTERVAL = 1200

Number = int | float


@dataclass
class Configuration:
    """Options for rendering one diagram block."""

    force_appendix: bool | None = None
    layout: Layout | None = None
    theme: Number | None = None
    dark_theme: Number | None = None
    pad: Number | None = None
    animate_interval: Number | None = None
    timeout: Number | None = None
    sketch: bool | None = None
    center: bool | None = None
    scale: float | None = None
    target: str | None = None
    stdout_format: FileType | None = None
    directory: str | None = None
    only_convert_marked_image: bool | None = None

    def merged_with(self, other: Configuration) -> Configuration:
        """Return a copy where every field set in ``other`` takes precedence."""
        overrides = {f.name: getattr(other, f.name) for f in fields(other) if getattr(other, f.name) is not None}
        return replace(self, **overrides)

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def to_dict(self) -> dict[str, Any]:
        """Set fields only, with enums flattened to their values."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            result[f.name] = value.value if isinstance(value, Enum) else value
        return result


@dataclass
class InlineConfig:
    """The ``vars.d2-config`` block embedded in D2 source.

    Only the keys that have a command-line counterpart are kept.
    """

    layout_engine: str | None = None
    theme_id: Number | None = None
    dark_theme_id: Number | None = None
    sketch: bool | None = None
    center: bool | None = None
    pad: Number | None = None

    def to_configuration(self) -> Configuration:
        """Translate into the ``Configuration`` namespace."""
        config = Configuration(
            theme=self.theme_id,
            dark_theme=self.dark_theme_id,
            sketch=self.sketch,
            center=self.center,
            pad=self.pad,
        )
        if self.layout_engine is not None:
            config.layout = lookup_layout(self.layout_engine)
        return config
