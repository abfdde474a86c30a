"""Replace D2 fenced code blocks in Markdown with rendered diagrams.

A fence is picked up when its info string starts with ``d2``. With
``only_convert_marked_image`` set, the info string must also carry ``:image``
(for example ```` ```d2:image ````). Anything that fails to render is left
as the original fence.
"""

from __future__ import annotations

import logging
import re

from d2_fence.config import Configuration
from d2_fence.errors import D2FenceError
from d2_fence.generator import generate_diagram, read_diagram_content
from d2_fence.merge import parse_config
from d2_fence.renderers.html import render_output

logger = logging.getLogger(__name__)

# A closing fence may be longer than the opener; an unclosed fence runs to the
# end of the document.
_FENCE_RE = re.compile(
    r"^[ \t]{0,3}(?P<fence>(?P<char>[`~])(?P=char){2,})(?P<info>[^\n]*)(?:\n|\Z)"
    r"(?P<body>.*?)"
    r"(?:^[ \t]{0,3}(?P=fence)(?P=char)*[ \t]*$|\Z)",
    re.MULTILINE | re.DOTALL,
)
_IMAGE_MARK_RE = re.compile(r":image\b")
_SRC_RE = re.compile(r"""\bsrc=(?:"([^"]*)"|'([^']*)'|(\S+))""")


def is_d2_fence(info: str, default: Configuration | None = None) -> bool:
    info = info.strip()
    if not info.startswith("d2"):
        return False
    if default is not None and default.only_convert_marked_image:
        return _IMAGE_MARK_RE.search(info) is not None
    return True


def fence_source(info: str) -> str | None:
    """External D2 file named by a ``src=...`` attribute in the info string."""
    m = _SRC_RE.search(info)
    if m is None:
        return None
    return next(group for group in m.groups() if group is not None)


def render_block(content: str, default: Configuration | None = None, executable: str | None = None) -> str:
    """Render one diagram block to an HTML fragment.

    Raises:
        D2FenceError: If d2 fails or its output cannot be embedded.
    """
    parsed = parse_config(content, default)
    diagram = generate_diagram(parsed.code, parsed.config, executable)
    return render_output(diagram.path, diagram.file_type)


def render_markdown(text: str, default: Configuration | None = None, executable: str | None = None) -> str:
    """Return ``text`` with every D2 fence replaced by its rendered diagram."""

    def replace(m: re.Match[str]) -> str:
        info = m.group("info")
        if not is_d2_fence(info, default):
            return m.group(0)
        content = read_diagram_content(m.group("body"), fence_source(info))
        if content is None:
            return m.group(0)
        try:
            return render_block(content, default, executable)
        except D2FenceError as e:
            logger.error("error rendering D2 diagram: %s", e)
            return m.group(0)

    return _FENCE_RE.sub(replace, text)
