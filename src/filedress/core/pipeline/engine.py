from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates every filedress command:
1. Validates and normalizes the configuration.
2. For file commands, discovers candidate files under the root.
3. 'add' / 'remove' / 'clean': dispatches one worker per file on a pool.
4. 'copy': reads files in order and delivers the aggregated text.
5. 'structure': parses the whole template, then scaffolds it.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, List, Optional, Tuple

from filedress.core.analysis.scaffolder import scaffold
from filedress.core.analysis.template_parser import count_nodes, parse_template_text
from filedress.core.pipeline.components.filters import resolve_extensions
from filedress.core.pipeline.components.reader import read_file_content, read_template_text
from filedress.core.pipeline.components.writer import build_bundle, write_output_file
from filedress.core.pipeline.stages.validator import validate_config
from filedress.core.pipeline.stages.worker import process_file_task
from filedress.core.services.path_resolver import resolve_label
from filedress.core.services.scanner import DiscoveryResult, discover_files
from filedress.domain.errors import ClipboardError, DiscoveryError, ParseError
from filedress.domain.pipeline_models import (
    CommandResult,
    ItemResult,
    ItemStatus,
    create_error_result,
    create_success_result,
)
from filedress.infra.clipboard import copy_to_clipboard

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


# ==============================================================================
# PUBLIC API
# ==============================================================================

def run_command(
        config: Optional[Dict[str, Any]],
        cancellation_event: Optional[threading.Event] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
) -> CommandResult:
    """
    Execute one filedress command.

    Args:
        config: Raw or partial configuration dictionary.
        cancellation_event: Optional event that stops scheduling new work.
        max_workers: Size of the worker pool for header commands.

    Returns:
        CommandResult: Final status, per-item outcomes and summary.

    Raises:
        ConfigError: If the configuration is invalid.
        ParseError: If the 'structure' template is malformed or unreadable.
    """
    cfg, _ = validate_config(config or {})
    command = cfg["command"]

    logger.debug(f"Running '{command}' with config: {cfg}")

    if command == "structure":
        return _run_structure(cfg)

    try:
        discovery = _discover(cfg)
    except DiscoveryError as e:
        logger.error(str(e))
        return create_error_result(str(e), command, cfg["directory"])

    warnings = [ItemResult(w.path, ItemStatus.WARNING, w.message) for w in discovery.warnings]

    if command == "copy":
        return _run_copy(cfg, discovery, warnings, cancellation_event)

    return _run_header_command(cfg, discovery, warnings, cancellation_event, max_workers)


# ==============================================================================
# COMMAND HANDLERS
# ==============================================================================

def _discover(cfg: Dict[str, Any]) -> DiscoveryResult:
    extensions = resolve_extensions(cfg["project"], cfg["extensions"])
    logger.info(f"Searching for files in: {cfg['directory']}")
    logger.debug(f"Extensions: {', '.join(sorted(extensions))}")
    return discover_files(cfg["directory"], extensions, cfg["depth"])


def _run_header_command(
        cfg: Dict[str, Any],
        discovery: DiscoveryResult,
        warnings: List[ItemResult],
        cancellation_event: Optional[threading.Event],
        max_workers: int,
) -> CommandResult:
    """Transform every discovered file in parallel, keeping discovery order in the report."""
    command = cfg["command"]
    root = cfg["directory"]
    records = discovery.records

    if not records:
        logger.info("No files found matching the criteria.")

    slots: List[Optional[ItemResult]] = [None] * len(records)
    cancelled = False

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="HeaderWorker") as executor:
        futures = {}
        for idx, record in enumerate(records):
            if cancellation_event and cancellation_event.is_set():
                cancelled = True
                break
            future = executor.submit(
                process_file_task,
                record=record,
                root=root,
                up=cfg["up"],
                command=command,
                force=cfg["force"],
                dry_run=cfg["dry_run"],
            )
            futures[future] = idx

        for future in as_completed(futures):
            slots[futures[future]] = future.result()

    items = warnings + [item for item in slots if item is not None]
    summary_extra = {"files_found": len(records)}

    if cancelled:
        logger.warning("Command aborted by user signal.")
        return create_error_result("Operation cancelled by user.", command, root, items, summary_extra)

    logger.debug(f"'{command}' finished: {len(items)} items")
    return create_success_result(command, root, items, dry_run=cfg["dry_run"], summary_extra=summary_extra)


def _run_copy(
        cfg: Dict[str, Any],
        discovery: DiscoveryResult,
        warnings: List[ItemResult],
        cancellation_event: Optional[threading.Event],
) -> CommandResult:
    """Aggregate file contents and deliver them to stdout, a file or the clipboard."""
    root = cfg["directory"]
    items = list(warnings)
    entries: List[Tuple[str, str]] = []

    for record in discovery.records:
        if cancellation_event and cancellation_event.is_set():
            logger.warning("Command aborted by user signal.")
            return create_error_result("Operation cancelled by user.", "copy", root, items)

        try:
            content = read_file_content(record.path)
        except UnicodeDecodeError as e:
            logger.error(f"Cannot read {record.rel_path}: not valid UTF-8 ({e.reason})")
            items.append(ItemResult(record.path, ItemStatus.FAILED, f"not valid UTF-8: {e.reason}"))
            continue
        except OSError as e:
            logger.error(f"Cannot read {record.rel_path}: {e}")
            items.append(ItemResult(record.path, ItemStatus.FAILED, str(e)))
            continue

        label = resolve_label(record.rel_path, root, cfg["up"])
        logger.info(f"[PROCESSING] {label}")
        entries.append((label, content))
        items.append(ItemResult(record.path, ItemStatus.COPIED, label))

    if not entries:
        logger.info("No files found matching the criteria.")
        return create_success_result("copy", root, items, summary_extra={"destination": None, "bytes": 0})

    bundle = build_bundle(entries)
    total_bytes = len(bundle.encode("utf-8"))
    summary_extra: Dict[str, Any] = {"bytes": total_bytes}

    if cfg["to_stdout"]:
        summary_extra["destination"] = "stdout"
    elif cfg["output_path"]:
        try:
            write_output_file(cfg["output_path"], bundle)
        except OSError as e:
            msg = f"Failed to write output file {cfg['output_path']}: {e}"
            logger.error(msg)
            return create_error_result(msg, "copy", root, items)
        summary_extra["destination"] = cfg["output_path"]
        logger.info(f"Wrote {len(entries)} files ({total_bytes} bytes) to {cfg['output_path']}")
    else:
        try:
            copy_to_clipboard(bundle)
        except ClipboardError as e:
            logger.error(str(e))
            return create_error_result(str(e), "copy", root, items)
        summary_extra["destination"] = "clipboard"
        logger.info(f"Copied {len(entries)} files ({total_bytes} bytes) to the clipboard.")

    return create_success_result("copy", root, items, output=bundle, summary_extra=summary_extra)


def _run_structure(cfg: Dict[str, Any]) -> CommandResult:
    """Parse the full template first; only a valid forest reaches the filesystem."""
    target = cfg["directory"]
    source = cfg["template_file"] or "<stdin>"

    try:
        text = read_template_text(cfg["template_file"])
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Cannot read template {source}: {e}") from e

    forest = parse_template_text(text, cfg["indent"])
    logger.info(f"Parsed {count_nodes(forest)} entries from {source}")

    try:
        items = scaffold(forest, target, dry_run=cfg["dry_run"])
    except OSError as e:
        msg = f"Cannot create target directory {target}: {e}"
        logger.error(msg)
        return create_error_result(msg, "structure", target, summary_extra={"template": source})

    return create_success_result(
        "structure", target, items, dry_run=cfg["dry_run"], summary_extra={"template": source}
    )
