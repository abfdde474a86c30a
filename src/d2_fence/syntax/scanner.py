"""D2 comment stripper — single forward pass over the source.

D2 has two comment forms: ``#`` to end of line, and block comments
delimited by ``\"\"\"``. Both are only comments outside string literals, so the
scanner tracks which quote kind (if any) is open. Content inside quotes is
emitted untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from d2_fence.types import ScanState

_TRIPLE_QUOTE = '"""'
_INDENT_CHARS = " \t"

_TRAILING_BLANKS_RE = re.compile(r"[ \t]+(?=\n)|[ \t]+\Z")
_BLANK_LINES_RE = re.compile(r"\n\s*\n")


@dataclass
class _Scanner:
    """Cursor over the source plus the quote state and the output buffer."""

    src: str
    pos: int = 0
    state: ScanState = field(default_factory=ScanState.default)
    out: list[str] = field(default_factory=list)

    # ── Primitive helpers ─────────────────────────────────────────────────────

    def eof(self) -> bool:
        return self.pos >= len(self.src)

    def emit(self, text: str) -> None:
        self.out.append(text)
        self.pos += len(text)

    def is_escaped(self, index: int) -> bool:
        """True when the char at ``index`` follows an odd run of backslashes."""
        backslashes = 0
        j = index - 1
        while j >= 0 and self.src[j] == "\\":
            backslashes += 1
            j -= 1
        return backslashes % 2 == 1

    def in_triple_run(self, index: int) -> bool:
        return any(self.src.startswith(_TRIPLE_QUOTE, j) for j in range(max(index - 2, 0), index + 1))

    def starts_line(self, index: int) -> bool:
        """True when only whitespace precedes ``index`` on its line."""
        line_start = self.src.rfind("\n", 0, index) + 1
        return not self.src[line_start:index].strip()

    def skip_newline_and_indent(self) -> None:
        if self.eof() or self.src[self.pos] != "\n":
            return
        self.pos += 1
        while not self.eof() and self.src[self.pos] in _INDENT_CHARS:
            self.pos += 1

    # ── Token handlers ────────────────────────────────────────────────────────

    def on_double_quote(self) -> None:
        index = self.pos
        if self.is_escaped(index):
            self.emit('"')
            return
        if self.state is ScanState.Default and self.src.startswith(_TRIPLE_QUOTE, index):
            self.skip_block_comment()
            return
        if self.state is not ScanState.InSingleQuoted and not self.in_triple_run(index):
            if self.state is ScanState.InDoubleQuoted:
                self.state = ScanState.Default
            else:
                self.state = ScanState.InDoubleQuoted
        self.emit('"')

    def on_single_quote(self) -> None:
        if self.state is not ScanState.InDoubleQuoted and not self.is_escaped(self.pos):
            if self.state is ScanState.InSingleQuoted:
                self.state = ScanState.Default
            else:
                self.state = ScanState.InSingleQuoted
        self.emit("'")

    def skip_block_comment(self) -> None:
        start = self.pos
        end = self.src.find(_TRIPLE_QUOTE, start + len(_TRIPLE_QUOTE))
        if end == -1:
            # Unterminated: keep the opener as literal text.
            self.emit(_TRIPLE_QUOTE)
            return
        self.pos = end + len(_TRIPLE_QUOTE)
        if self.starts_line(start):
            self.skip_newline_and_indent()

    def skip_line_comment(self) -> None:
        leading = self.starts_line(self.pos)
        end = self.src.find("\n", self.pos)
        if end == -1:
            self.pos = len(self.src)
            return
        # Inline comments keep their newline; the main loop emits it.
        self.pos = end
        if leading:
            self.skip_newline_and_indent()

    def run(self) -> str:
        while not self.eof():
            ch = self.src[self.pos]
            if ch == '"':
                self.on_double_quote()
            elif ch == "'":
                self.on_single_quote()
            elif ch == "#" and self.state is ScanState.Default and not self.is_escaped(self.pos):
                self.skip_line_comment()
            else:
                self.emit(ch)
        return "".join(self.out)


def _normalize(text: str) -> str:
    """Drop trailing blanks and the empty lines left behind by removed comments."""
    text = _TRAILING_BLANKS_RE.sub("", text)
    return _BLANK_LINES_RE.sub("\n", text)


def strip_comments(code: str) -> str:
    """Remove every D2 comment from ``code``, leaving string literals intact.

    Args:
        code: D2 source text.

    Returns:
        The source without comments. Unterminated block-comment openers are
        kept as literal text. Stripping already-stripped text is a no-op.
    """
    return _normalize(_Scanner(src=code).run())
