from __future__ import annotations

"""
Strict File Reading Component.

Files are rewritten in place, so content is decoded strictly: a file that is
not valid UTF-8 raises UnicodeDecodeError and is reported as failed instead
of being silently corrupted by replacement characters. Newlines are read
untranslated so CRLF files keep their terminators.
"""

import sys
from typing import Optional

from filedress.domain.errors import ParseError

# -----------------------------------------------------------------------------
# READING OPERATIONS
# -----------------------------------------------------------------------------

def read_file_content(file_path: str) -> str:
    """
    Read a whole file as UTF-8 text without newline translation.

    Args:
        file_path: Absolute path to the target file.

    Returns:
        str: Exact file content.

    Raises:
        OSError: If the file cannot be opened.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    with open(file_path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def read_template_text(template_file: Optional[str]) -> str:
    """
    Read scaffold template text from a file, or from stdin when no file is given.

    Raises:
        OSError: If the template file cannot be opened.
        UnicodeDecodeError: If the template is not valid UTF-8.
        ParseError: If no file is given and stdin is an interactive terminal.
    """
    if template_file:
        with open(template_file, "r", encoding="utf-8") as f:
            return f.read()

    if sys.stdin is None or sys.stdin.isatty():
        raise ParseError("No template file provided and no data piped to stdin.")
    return sys.stdin.read()
