from __future__ import annotations

"""
Output Persistence and Formatting.

Handles atomic replacement of rewritten source files and the aggregation
format used by the 'copy' command.
"""

import logging
import os
import stat
import tempfile
from typing import Iterable, Tuple

from filedress.domain.constants import COPY_ENTRY_HEADER, COPY_ENTRY_SEPARATOR

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# ATOMIC FILE REPLACEMENT
# -----------------------------------------------------------------------------

def atomic_write(file_path: str, content: str) -> None:
    """
    Replace a file's content atomically.

    The new content is written to a temporary file in the same directory and
    moved over the target with os.replace, so a crash never leaves a
    half-written file. The original permission bits are kept.

    Args:
        file_path: File to replace (or create).
        content: New text, written as UTF-8 without newline translation.

    Raises:
        OSError: If the temporary file cannot be written or moved.
    """
    directory = os.path.dirname(os.path.abspath(file_path)) or "."
    fd, tmp_path = tempfile.mkstemp(prefix=".filedress-", suffix=".tmp", dir=directory)

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as tmp:
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())

        try:
            mode = stat.S_IMODE(os.stat(file_path).st_mode)
            os.chmod(tmp_path, mode)
        except FileNotFoundError:
            os.chmod(tmp_path, 0o644)

        os.replace(tmp_path, file_path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise

# -----------------------------------------------------------------------------
# COPY AGGREGATION
# -----------------------------------------------------------------------------

def format_copy_entry(label: str, content: str) -> str:
    """
    Render one aggregated entry.

    Output Format:
    FILE: <label>
    ---

    <content>
    """
    return COPY_ENTRY_HEADER.format(label=label) + content


def build_bundle(entries: Iterable[Tuple[str, str]]) -> str:
    """
    Join (label, content) pairs into the aggregated copy text.

    Args:
        entries: Pairs in output order.

    Returns:
        str: Entries separated by a '---' rule.
    """
    return COPY_ENTRY_SEPARATOR.join(format_copy_entry(label, content) for label, content in entries)


def write_output_file(output_path: str, text: str) -> None:
    """Persist aggregated text to a file, creating its parent directory."""
    parent = os.path.dirname(os.path.abspath(output_path))
    if parent and not os.path.isdir(parent):
        os.makedirs(parent, exist_ok=True)
    atomic_write(output_path, text)
    logger.debug(f"Aggregated output written to {output_path} ({len(text)} chars)")
