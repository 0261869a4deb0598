from __future__ import annotations

"""
Path Header Transformer.

Pure functions that add, remove, or preserve the path header of one file's
content. No I/O happens here: callers pass the current text and receive the
new text together with a TransformOutcome, and decide themselves whether to
commit it.

A header is a single line rendered through the file's comment style:

    # Path: services/api/v1/user.py
    <!-- Path: web/index.html -->

It is recognized as the first non-empty line of a file whose text starts with
the style's header opener followed by the 'Path:' marker, regardless of the
label it currently carries.
"""

import logging
import re
from typing import Callable, Dict, List, Optional

from filedress.core.processing.cleaner import strip_comments
from filedress.domain.comment_grammar import CommentStyle
from filedress.domain.constants import HEADER_MARKER
from filedress.domain.pipeline_models import TransformOutcome, TransformResult

logger = logging.getLogger(__name__)

_BOM = "\ufeff"

# -----------------------------------------------------------------------------
# HEADER RENDERING AND DETECTION
# -----------------------------------------------------------------------------

def render_header(style: CommentStyle, label: str) -> str:
    """
    Serialize a header line (without line terminator).

    Args:
        style: Comment style of the target file.
        label: Resolved relative label.

    Returns:
        str: e.g. '# Path: src/main.py' or '/* Path: css/site.css */'.
    """
    if style.has_line:
        return f"{style.line_prefix} {HEADER_MARKER} {label}"
    return f"{style.block_start} {HEADER_MARKER} {label} {style.block_end}"


def header_pattern(style: CommentStyle) -> re.Pattern:
    """Regex matching any header line of a style, whatever its label."""
    opener = re.escape(style.header_opener)
    return re.compile(rf"^[ \t]*{opener}[ \t]*{re.escape(HEADER_MARKER)}")


def split_lines(content: str) -> List[str]:
    """
    Split text into lines that keep their terminators.

    Only '\\n' separates lines, so joining the result reproduces the input
    byte for byte.
    """
    if not content:
        return []
    lines = [line + "\n" for line in content.split("\n")]
    lines[-1] = lines[-1][:-1]
    if not lines[-1]:
        lines.pop()
    return lines


def find_header_index(lines: List[str], style: CommentStyle) -> Optional[int]:
    """
    Locate the header among split lines.

    Returns:
        Optional[int]: Index of the header line, or None when the first
                       non-empty line is not a header.
    """
    pattern = header_pattern(style)
    for idx, line in enumerate(lines):
        if not line.strip():
            continue
        return idx if pattern.match(line) else None
    return None


# -----------------------------------------------------------------------------
# TRANSFORMATIONS
# -----------------------------------------------------------------------------

def add_header(content: str, style: CommentStyle, label: str, force: bool = False) -> TransformResult:
    """
    Prepend a header, or replace an existing one when forced.

    The header goes at offset 0 followed by the file's own newline style, so
    the original first line is untouched. With `force`, only the header line
    is re-rendered and its terminator kept.
    """
    header = render_header(style, label)
    lines = split_lines(content)
    idx = find_header_index(lines, style)

    if idx is None:
        return TransformResult(header + _detect_newline(content) + content, TransformOutcome.CHANGED, "added")

    if not force:
        return TransformResult(content, TransformOutcome.SKIPPED_NOOP, "header exists (use --force to overwrite)")

    old_line = lines[idx]
    body = old_line.rstrip("\r\n")
    if body == header:
        return TransformResult(content, TransformOutcome.SKIPPED_NOOP, "header already up to date")

    lines[idx] = header + old_line[len(body):]
    return TransformResult("".join(lines), TransformOutcome.CHANGED, "replaced")


def remove_header(content: str, style: CommentStyle, label: str = "", force: bool = False) -> TransformResult:
    """Delete exactly the header line, terminator included."""
    lines = split_lines(content)
    idx = find_header_index(lines, style)
    if idx is None:
        return TransformResult(content, TransformOutcome.SKIPPED_NOOP, "no header found")

    del lines[idx]
    return TransformResult("".join(lines), TransformOutcome.CHANGED, "removed")


def clean_comments(content: str, style: CommentStyle, label: str = "", force: bool = False) -> TransformResult:
    """Strip every comment except the header line, which is kept verbatim."""
    lines = split_lines(content)
    idx = find_header_index(lines, style)
    head = "".join(lines[:idx + 1]) if idx is not None else ""

    cleaned = head + strip_comments(content[len(head):], style)
    if cleaned == content:
        return TransformResult(content, TransformOutcome.SKIPPED_NOOP, "no comments to clean")
    return TransformResult(cleaned, TransformOutcome.CHANGED, "cleaned")


_OPERATIONS: Dict[str, Callable[..., TransformResult]] = {
    "add": add_header,
    "remove": remove_header,
    "clean": clean_comments,
}


def transform_content(
        content: str,
        style: Optional[CommentStyle],
        label: str,
        command: str,
        force: bool = False,
) -> TransformResult:
    """
    Apply one header command to a file's content.

    A leading UTF-8 byte order mark stays in front of everything else.

    Args:
        content: Current file text.
        style: Comment style of the file, or None when unsupported.
        label: Header label (ignored by 'remove' and 'clean').
        command: 'add', 'remove' or 'clean'.
        force: Overwrite an existing header label ('add' only).

    Returns:
        TransformResult: New content and outcome.
    """
    if style is None:
        return TransformResult(content, TransformOutcome.SKIPPED_UNSUPPORTED, "unsupported extension")

    try:
        operation = _OPERATIONS[command]
    except KeyError:
        raise ValueError(f"Unsupported header command: {command}") from None

    bom = _BOM if content.startswith(_BOM) else ""
    result = operation(content[len(bom):], style, label, force)
    if bom and result.changed:
        return TransformResult(bom + result.content, result.outcome, result.action)
    if bom:
        return TransformResult(content, result.outcome, result.action)
    return result

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _detect_newline(content: str) -> str:
    """Use CRLF when the file's first line ending is CRLF, LF otherwise."""
    first = content.find("\n")
    if first > 0 and content[first - 1] == "\r":
        return "\r\n"
    return "\n"
