"""Shared type definitions for d2-fence.

Enums and lookup tables used across the scanner, parsers, and generator.
"""

from __future__ import annotations

from enum import Enum, IntEnum, auto


class ScanState(Enum):
    Default = auto()
    InSingleQuoted = auto()  # '...'
    InDoubleQuoted = auto()  # "..."

    @classmethod
    def default(cls) -> ScanState:
        return cls.Default


class Layout(Enum):
    """D2 layout engines."""

    DAGRE = "dagre"
    ELK = "elk"
    TALA = "tala"


class FileType(Enum):
    """File types D2 can export a diagram as."""

    SVG = "svg"
    BASE64_SVG = "base64_svg"
    PNG = "png"
    GIF = "gif"

    @classmethod
    def default(cls) -> FileType:
        return cls.SVG


class Theme(IntEnum):
    """Built-in D2 theme IDs. D2 accepts any number, these are the named ones."""

    NEUTRAL_DEFAULT = 0
    NEUTRAL_GREY = 1
    FLAGSHIP_TERRASTRUCT = 3
    COOL_CLASSICS = 4
    MIXED_BERRY_BLUE = 5
    GRAPE_SODA = 6
    AUBERGINE = 7
    COLORBLIND_CLEAR = 8
    VANILLA_NITRO_COLA = 100
    ORANGE_CREAMSICLE = 101
    SHIRLEY_TEMPLE = 102
    EARTH_TONES = 103
    EVERGLADE_GREEN = 104
    BUTTERED_TOAST = 105
    DARK_MAUVE = 200
    DARK_FLAGSHIP_TERRASTRUCT = 201
    TERMINAL = 300
    TERMINAL_GRAYSCALE = 301
    ORIGAMI = 302


_LAYOUT_MAP: dict[str, Layout] = {
    "DAGRE": Layout.DAGRE,
    "ELK": Layout.ELK,
    "TALA": Layout.TALA,
}

_FILE_TYPE_MAP: dict[str, FileType] = {
    "SVG": FileType.SVG,
    "BASE64_SVG": FileType.BASE64_SVG,
    "PNG": FileType.PNG,
    "GIF": FileType.GIF,
}

_MEDIA_TYPES: dict[FileType, str] = {
    FileType.SVG: "image/svg+xml",
    FileType.BASE64_SVG: "image/svg+xml",
    FileType.PNG: "image/png",
    FileType.GIF: "image/gif",
}


def lookup_layout(name: str) -> Layout | None:
    """Case-insensitive layout lookup. Returns None when unrecognized."""
    return _LAYOUT_MAP.get(name.upper())


def lookup_file_type(name: str) -> FileType | None:
    """Case-insensitive file type lookup. Returns None when unrecognized."""
    return _FILE_TYPE_MAP.get(name.upper())


def media_type(file_type: FileType) -> str:
    return _MEDIA_TYPES[file_type]
