from __future__ import annotations

"""
Directory Scaffolder.

Materializes a parsed template forest under a target directory. Existing
entries are never overwritten: they are reported as skipped and existing
directories are still descended into, so a scaffold can be re-run safely on
a partially built tree.
"""

import logging
import os
from typing import List, Tuple

from filedress.domain.pipeline_models import ItemResult, ItemStatus
from filedress.domain.tree_models import Forest, TemplateNode

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def scaffold(forest: Forest, target: str, dry_run: bool = False) -> List[ItemResult]:
    """
    Create the directories and empty files described by a forest.

    The walk is depth-first with an explicit stack; every directory is
    created before its children. A failure on one entry is reported and the
    remaining entries are still processed, except for the subtree of a
    directory that could not be created.

    Args:
        forest: Parsed template.
        target: Directory under which the forest is created (made if missing).
        dry_run: Report what would be created without touching the disk.

    Returns:
        List[ItemResult]: One result per template entry, in template order.

    Raises:
        OSError: If the target directory itself cannot be created.
    """
    target_abs = os.path.abspath(target)
    results: List[ItemResult] = []

    if not dry_run and not os.path.isdir(target_abs):
        os.makedirs(target_abs, exist_ok=True)
        logger.info(f"[CREATED DIR] {target_abs}")

    stack: List[Tuple[str, TemplateNode]] = [(target_abs, n) for n in reversed(forest)]

    while stack:
        parent, node = stack.pop()
        path = os.path.join(parent, node.name)

        if node.is_dir:
            result, descend = _make_directory(path, dry_run)
        else:
            result, descend = _make_file(path, dry_run), False

        results.append(result)
        if descend:
            for child in reversed(node.children):
                stack.append((path, child))

    return results


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _make_directory(path: str, dry_run: bool) -> Tuple[ItemResult, bool]:
    """Create one directory. Returns the result and whether to descend."""
    if os.path.isdir(path):
        logger.info(f"[SKIP] Directory exists: {path}")
        return ItemResult(path, ItemStatus.SKIPPED, "directory exists"), True

    if os.path.lexists(path):
        logger.warning(f"[SKIP] A file occupies directory path: {path}")
        return ItemResult(path, ItemStatus.SKIPPED, "conflict: path exists and is not a directory"), False

    if dry_run:
        logger.info(f"[DRY RUN] Would create directory: {path}")
        return ItemResult(path, ItemStatus.CREATED, "directory (dry run)"), True

    try:
        os.makedirs(path)
    except OSError as e:
        logger.error(f"Failed to create directory {path}: {e}")
        return ItemResult(path, ItemStatus.FAILED, str(e)), False

    logger.info(f"[CREATED DIR] {path}")
    return ItemResult(path, ItemStatus.CREATED, "directory"), True


def _make_file(path: str, dry_run: bool) -> ItemResult:
    """Create one empty file without truncating an existing one."""
    if os.path.lexists(path):
        logger.info(f"[SKIP] Path exists: {path}")
        return ItemResult(path, ItemStatus.SKIPPED, "file exists")

    if dry_run:
        logger.info(f"[DRY RUN] Would create file: {path}")
        return ItemResult(path, ItemStatus.CREATED, "file (dry run)")

    try:
        parent = os.path.dirname(path)
        if not os.path.isdir(parent):
            os.makedirs(parent, exist_ok=True)
        with open(path, "x", encoding="utf-8"):
            pass
    except FileExistsError:
        logger.info(f"[SKIP] Path exists: {path}")
        return ItemResult(path, ItemStatus.SKIPPED, "file exists")
    except OSError as e:
        logger.error(f"Failed to create file {path}: {e}")
        return ItemResult(path, ItemStatus.FAILED, str(e))

    logger.info(f"[CREATED FILE] {path}")
    return ItemResult(path, ItemStatus.CREATED, "file")
