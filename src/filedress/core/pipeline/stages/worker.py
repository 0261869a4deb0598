from __future__ import annotations

"""
Atomic Header Worker.

Encapsulates the processing of a single file for the 'add', 'remove' and
'clean' commands: read, transform, and commit the new content atomically.
Designed to run inside a ThreadPoolExecutor; every recoverable failure is
returned as a FAILED item instead of being raised into the pool.
"""

import logging

from filedress.core.pipeline.components.reader import read_file_content
from filedress.core.pipeline.components.writer import atomic_write
from filedress.core.processing.header import transform_content
from filedress.core.services.path_resolver import resolve_label
from filedress.domain.comment_grammar import get_comment_style
from filedress.domain.errors import TransformError
from filedress.domain.pipeline_models import FileRecord, ItemResult, ItemStatus, TransformOutcome

logger = logging.getLogger(__name__)

_ACTION_TAGS = {
    "added": "[ADDED]",
    "replaced": "[REPLACED]",
    "removed": "[REMOVED]",
    "cleaned": "[CLEANED]",
}


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def process_file_task(
        record: FileRecord,
        root: str,
        up: int,
        command: str,
        force: bool = False,
        dry_run: bool = False,
) -> ItemResult:
    """
    Execute the full header lifecycle for a single file.

    Args:
        record: File selected by discovery.
        root: Discovery root used to resolve the header label.
        up: Ancestor levels to include in the label.
        command: 'add', 'remove' or 'clean'.
        force: Overwrite an existing header ('add' only).
        dry_run: Compute the outcome without writing.

    Returns:
        ItemResult: Final status of the file.
    """
    style = get_comment_style(record.extension)
    if style is None:
        logger.info(f"[SKIP] {record.rel_path}: unsupported extension '.{record.extension}'")
        return ItemResult(record.path, ItemStatus.SKIPPED, TransformOutcome.SKIPPED_UNSUPPORTED.value)

    try:
        label = resolve_label(record.rel_path, root, up)
        content = read_file_content(record.path)
        result = transform_content(content, style, label, command, force=force)

        if not result.changed:
            logger.info(f"[SKIP] {record.rel_path}: {result.action}")
            return ItemResult(record.path, ItemStatus.SKIPPED, result.action)

        tag = _ACTION_TAGS.get(result.action, "[CHANGED]")
        if dry_run:
            logger.info(f"[DRY RUN] {tag} {record.rel_path}")
            return ItemResult(record.path, ItemStatus.CHANGED, f"{result.action} (dry run)")

        _commit(record, result.content)
        logger.info(f"{tag} {record.rel_path}")
        return ItemResult(record.path, ItemStatus.CHANGED, result.action)

    except UnicodeDecodeError as e:
        logger.error(f"Worker failed for {record.rel_path}: not valid UTF-8 ({e.reason})")
        return ItemResult(record.path, ItemStatus.FAILED, f"not valid UTF-8: {e.reason}")
    except (OSError, TransformError) as e:
        logger.error(f"Worker failed for {record.rel_path}: {e}")
        return ItemResult(record.path, ItemStatus.FAILED, str(e))


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _commit(record: FileRecord, content: str) -> None:
    """Write new content atomically, wrapping I/O failures with the file path."""
    try:
        atomic_write(record.path, content)
    except OSError as e:
        raise TransformError(f"Write failed: {e.strerror or e}", path=record.path) from e
