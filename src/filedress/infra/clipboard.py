from __future__ import annotations

"""
System Clipboard Access.

Thin wrapper over pyperclip that turns its platform errors into the
application's ClipboardError.
"""

import logging

import pyperclip

from filedress.domain.errors import ClipboardError

logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str) -> None:
    """
    Place text on the system clipboard.

    Args:
        text: Content to copy.

    Raises:
        ClipboardError: If no clipboard mechanism is available or the copy fails.
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardError(
            f"Failed to copy content to the clipboard: {e}. "
            f"Use --stdout or --output to write the content elsewhere."
        ) from e
    logger.debug(f"Copied {len(text)} chars to the clipboard")
