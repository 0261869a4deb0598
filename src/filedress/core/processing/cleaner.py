from __future__ import annotations

"""
Comment Stripping Engine.

Removes line and block comments from source text using a literal-aware
scanner. The scanner tracks whether it is inside a string literal, a block
comment or plain code, so that comment-looking text inside a string is never
touched and quote characters inside a comment never open a string.

Lines that become blank because a comment was removed are dropped entirely;
every other line keeps its exact bytes apart from the removed span.
"""

import logging
import re
from enum import Enum
from typing import List

from filedress.domain.comment_grammar import CommentStyle

logger = logging.getLogger(__name__)


class _State(Enum):
    CODE = "code"
    STRING = "string"
    BLOCK = "block"


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def strip_comments(text: str, style: CommentStyle) -> str:
    """
    Strip every comment span matched by a comment style.

    Line comments are removed from their prefix to the end of the line, block
    comments from their opening to their closing delimiter inclusive. Single-
    line string literals end at the end of a line even when unterminated;
    delimiters listed in `style.multiline_strings` and raw strings (C++
    R"(...)", C# @"...", Rust r#"..."#) may span lines. Tokens matched by
    `style.literal_patterns` are copied as-is.

    Args:
        text: Source text (any line ending convention).
        style: Comment style of the file.

    Returns:
        str: Text without comments.
    """
    if not text:
        return ""

    scanner = _Scanner(text, style)
    result = scanner.run()

    if len(result) != len(text):
        logger.debug(f"Stripped comments: {len(text)} -> {len(result)} chars")
    return result


# -----------------------------------------------------------------------------
# SCANNER
# -----------------------------------------------------------------------------

class _Scanner:
    """Single-pass state machine over the whole text."""

    def __init__(self, text: str, style: CommentStyle) -> None:
        self.text = text
        self.style = style
        self.delimiters = sorted(style.string_delimiters, key=len, reverse=True)
        self.raw_rules = [(re.compile(rule.opener), rule) for rule in style.raw_strings]
        self.literals = [re.compile(p) for p in style.literal_patterns]

        self.out: List[str] = []
        self.line: List[str] = []
        self.removed_on_line = False
        self.comment_to_eol = False

        self.state = _State.CODE
        self.string_close = ""
        self.string_raw = False
        self.string_doubled = False
        self.string_spans_lines = False

    def run(self) -> str:
        text = self.text
        n = len(text)
        i = 0

        while i < n:
            ch = text[i]

            if ch == "\n":
                self._end_line("\n")
                i += 1
                continue

            if self.state is _State.BLOCK:
                end = self.style.block_end or ""
                if text.startswith(end, i):
                    self.state = _State.CODE
                    i += len(end)
                else:
                    # Keep CRLF terminators of lines that end inside a block.
                    if ch == "\r" and text.startswith("\n", i + 1):
                        self.line.append(ch)
                    i += 1
                continue

            if self.state is _State.STRING:
                i = self._consume_string_char(i)
                continue

            i = self._consume_code(i)

        if self.line or self.removed_on_line:
            self._end_line("")

        return "".join(self.out)

    # -- state handlers --------------------------------------------------------

    def _consume_string_char(self, i: int) -> int:
        text = self.text
        ch = text[i]
        close = self.string_close

        if not self.string_raw and ch == "\\" and i + 1 < len(text) and text[i + 1] != "\n":
            self.line.append(text[i:i + 2])
            return i + 2

        if text.startswith(close, i):
            if self.string_doubled and text.startswith(close, i + len(close)):
                self.line.append(close + close)
                return i + 2 * len(close)
            self.line.append(close)
            self._leave_string()
            return i + len(close)

        self.line.append(ch)
        return i + 1

    def _consume_code(self, i: int) -> int:
        text = self.text
        style = self.style

        for pattern in self.literals:
            m = pattern.match(text, i)
            if m:
                self.line.append(m.group())
                return m.end()

        for pattern, rule in self.raw_rules:
            m = pattern.match(text, i)
            if m:
                self._enter_string(
                    rule.terminator.format(tag=m.groupdict().get("tag") or ""),
                    raw=True, doubled=rule.doubled_quote_escape, spans_lines=True,
                )
                self.line.append(m.group())
                return m.end()

        if style.has_block and text.startswith(style.block_start or "", i):
            self.state = _State.BLOCK
            self.removed_on_line = True
            return i + len(style.block_start or "")

        if style.has_line and text.startswith(style.line_prefix or "", i) and self._line_comment_allowed():
            end = text.find("\n", i)
            if end == -1:
                end = len(text)
            if end > i and text[end - 1] == "\r":
                end -= 1
            self.removed_on_line = True
            self.comment_to_eol = True
            return end

        for delim in self.delimiters:
            if text.startswith(delim, i):
                self._enter_string(delim, spans_lines=delim in style.multiline_strings)
                self.line.append(delim)
                return i + len(delim)

        self.line.append(text[i])
        return i + 1

    def _line_comment_allowed(self) -> bool:
        if not self.style.line_prefix_needs_space or not self.line:
            return True
        return self.line[-1][-1:] in (" ", "\t")

    def _enter_string(self, close: str, raw: bool = False, doubled: bool = False,
                      spans_lines: bool = False) -> None:
        self.state = _State.STRING
        self.string_close = close
        self.string_raw = raw
        self.string_doubled = doubled
        self.string_spans_lines = spans_lines

    def _leave_string(self) -> None:
        self.state = _State.CODE
        self.string_close = ""
        self.string_raw = False
        self.string_doubled = False
        self.string_spans_lines = False

    # -- line assembly -------------------------------------------------------

    def _end_line(self, terminator: str) -> None:
        content = "".join(self.line)
        cr = ""
        if content.endswith("\r"):
            content, cr = content[:-1], "\r"

        if self.removed_on_line:
            if self.comment_to_eol or self.state is _State.BLOCK:
                content = content.rstrip(" \t")
            if content.strip():
                self.out.append(content + cr + terminator)
        else:
            self.out.append(content + cr + terminator)

        # Unterminated single-line strings stop at the end of the line.
        if self.state is _State.STRING and not self.string_spans_lines:
            self._leave_string()

        self.line = []
        self.comment_to_eol = False
        self.removed_on_line = self.state is _State.BLOCK
