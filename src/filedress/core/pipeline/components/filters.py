from __future__ import annotations

"""
Extension Filtering Engine.

Builds the extension whitelist used by discovery from a project preset and/or
an explicit list, and classifies file names against it.
"""

import os
from typing import Iterable, List, Optional, Set

from filedress.domain.comment_grammar import normalize_extension, supported_extensions
from filedress.domain.constants import PROJECT_PRESETS

# -----------------------------------------------------------------------------
# CONFIGURATION DEFAULTS
# -----------------------------------------------------------------------------

def default_extensions() -> List[str]:
    """
    Get the extension set used when neither a preset nor a list is given.

    Returns:
        List[str]: Every extension known to the comment grammar.
    """
    return supported_extensions()

# -----------------------------------------------------------------------------
# EXTENSION RESOLUTION
# -----------------------------------------------------------------------------

def normalize_extensions(extensions: Iterable[str]) -> List[str]:
    """
    Normalize raw extensions ('.TS', ' js') and drop blanks and duplicates.

    Args:
        extensions: Raw extension strings.

    Returns:
        List[str]: Lowercase, dot-less extensions in first-seen order.
    """
    out: List[str] = []
    for ext in extensions:
        e = normalize_extension(ext)
        if e and e not in out:
            out.append(e)
    return out


def resolve_extensions(project: Optional[str], extensions: Optional[List[str]]) -> Set[str]:
    """
    Compute the extension filter from a preset and an explicit list.

    When both are given the result is their union, so an explicit list never
    silently overrides a preset.

    Args:
        project: Preset name (already validated) or None.
        extensions: Explicit extensions or None.

    Returns:
        Set[str]: Extensions to match.
    """
    if project is None and extensions is None:
        return set(default_extensions())

    resolved: Set[str] = set()
    if project is not None:
        resolved.update(PROJECT_PRESETS[project])
    if extensions is not None:
        resolved.update(normalize_extensions(extensions))
    return resolved

# -----------------------------------------------------------------------------
# FILE CLASSIFICATION
# -----------------------------------------------------------------------------

def extension_of(file_name: str) -> str:
    """Lowercase extension of a file name without the dot ('' if none)."""
    _, ext = os.path.splitext(file_name)
    return normalize_extension(ext)
