from __future__ import annotations

"""
File Discovery Service.

Traverses a root directory with an explicit worklist (no recursion), bounded
by a depth limit, and collects the files whose extension is in the filter
set. Symbolic links are never followed. Unreadable subdirectories are recorded
as warnings and skipped so that one bad entry never aborts the walk.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from filedress.core.pipeline.components.filters import extension_of
from filedress.domain.errors import DiscoveryError
from filedress.domain.pipeline_models import FileRecord

logger = logging.getLogger(__name__)


@dataclass
class DiscoveryResult:
    """Files found by a discovery pass plus the per-path warnings it raised."""
    records: List[FileRecord] = field(default_factory=list)
    warnings: List[DiscoveryError] = field(default_factory=list)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def discover_files(
        root: str,
        extensions: Set[str],
        depth: Optional[int] = None,
) -> DiscoveryResult:
    """
    Enumerate candidate files under a root directory.

    depth=1 restricts results to files directly inside root; depth=N allows
    descending N-1 levels below it; None means unlimited.

    Args:
        root: Directory to walk.
        extensions: Lowercase, dot-less extensions to keep.
        depth: Maximum depth bound (>= 1) or None.

    Returns:
        DiscoveryResult: Records sorted by relative path, and warnings.

    Raises:
        DiscoveryError: If the root itself cannot be listed.
    """
    root_abs = os.path.abspath(root)
    result = DiscoveryResult()

    # Worklist entries: (absolute dir, relative parts, level where root is 1)
    worklist: List[Tuple[str, Tuple[str, ...], int]] = [(root_abs, (), 1)]

    while worklist:
        current, rel_parts, level = worklist.pop()

        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError as e:
            if current == root_abs:
                raise DiscoveryError(f"Cannot read directory '{root_abs}': {e}", path=root_abs) from e
            warning = DiscoveryError(f"Cannot read directory: {e.strerror or e}", path=current)
            logger.warning(f"[WARN] Skipping unreadable directory: {current} ({warning.message})")
            result.warnings.append(warning)
            continue

        for entry in entries:
            try:
                if entry.is_symlink():
                    logger.debug(f"Not following symlink: {entry.path}")
                    continue

                if entry.is_dir(follow_symlinks=False):
                    if depth is None or level < depth:
                        worklist.append((entry.path, rel_parts + (entry.name,), level + 1))
                    continue

                if not entry.is_file(follow_symlinks=False):
                    continue
            except OSError as e:
                warning = DiscoveryError(f"Cannot stat entry: {e.strerror or e}", path=entry.path)
                logger.warning(f"[WARN] Skipping unreadable entry: {entry.path}")
                result.warnings.append(warning)
                continue

            ext = extension_of(entry.name)
            if not ext or ext not in extensions:
                continue

            result.records.append(FileRecord(
                path=entry.path,
                extension=ext,
                rel_path="/".join(rel_parts + (entry.name,)),
            ))

    result.records.sort(key=lambda r: r.rel_path)
    logger.debug(f"Discovery in {root_abs}: {len(result.records)} files, {len(result.warnings)} warnings")
    return result
