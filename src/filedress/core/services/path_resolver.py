from __future__ import annotations

"""
Header Label Resolution.

Computes the project-relative label written into a file's path header: the
discovery root's own name, preceded by up to `up` ancestor directory names,
followed by the file's path relative to the root.
"""

import os
from pathlib import Path
from typing import List


def ancestor_names(root: str) -> List[str]:
    """
    Get the directory names from the filesystem anchor down to root.

    Args:
        root: Directory path (made absolute).

    Returns:
        List[str]: Names top-down, the last one being the root's own name.
    """
    parts = Path(os.path.abspath(root)).parts
    anchor = Path(os.path.abspath(root)).anchor
    return [p for p in parts if p and p != anchor]


def resolve_label(rel_path: str, root: str, up: int = 0) -> str:
    """
    Build the header label of a file.

    Example: root 'project/services/api/v1', rel_path 'user.py'
    gives 'v1/user.py' for up=0 and 'services/api/v1/user.py' for up=2.
    An `up` larger than the available ancestors is clamped.

    Args:
        rel_path: File path relative to root ('/' or OS separators).
        root: Discovery root.
        up: Number of ancestor names to include above the root.

    Returns:
        str: '/'-joined label.
    """
    names = ancestor_names(root)
    take = min(max(up, 0) + 1, len(names))
    prefix = names[len(names) - take:] if take else []

    rel_parts = [p for p in rel_path.replace("\\", "/").split("/") if p and p != "."]
    return "/".join(prefix + rel_parts)
