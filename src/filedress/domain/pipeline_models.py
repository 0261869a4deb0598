from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the core data structures and factory functions used to communicate
execution results between the command engine and the CLI layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# DISCOVERY AND TRANSFORM MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileRecord:
    """
    A file selected by discovery.

    Attributes:
        path: Absolute filesystem path.
        extension: Lowercase extension without the leading dot.
        rel_path: Path relative to the discovery root, '/'-separated.
    """
    path: str
    extension: str
    rel_path: str


class TransformOutcome(Enum):
    """Result classification of a single header transformation."""
    CHANGED = "changed"
    SKIPPED_UNSUPPORTED = "skipped-unsupported-extension"
    SKIPPED_NOOP = "skipped-noop"


@dataclass(frozen=True)
class TransformResult:
    """New content of a file together with the transformation outcome."""
    content: str
    outcome: TransformOutcome
    action: str = ""

    @property
    def changed(self) -> bool:
        return self.outcome is TransformOutcome.CHANGED


class ItemStatus(str, Enum):
    """Per-item status reported back to the caller."""
    CHANGED = "changed"
    CREATED = "created"
    COPIED = "copied"
    SKIPPED = "skipped"
    FAILED = "failed"
    WARNING = "warning"


@dataclass(frozen=True)
class ItemResult:
    """
    Outcome of one file or template entry.

    Attributes:
        path: Absolute path of the affected entry.
        status: Final status.
        detail: Human-readable reason or action tag.
    """
    path: str
    status: ItemStatus
    detail: str = ""

# -----------------------------------------------------------------------------
# COMMAND RESULT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CommandResult:
    """
    Unified result object of a complete command execution.

    Attributes:
        ok: Flag indicating that no fatal error occurred.
        error: Descriptive message in case of failure.
        command: Executed command name.
        root: Normalized root (or target) directory.
        dry_run: Whether mutations were only simulated.
        items: Per-item outcomes in processing order.
        output: Aggregated text produced by 'copy'.
        summary: Tally of item statuses plus command-specific metadata.
    """
    ok: bool
    error: str
    command: str
    root: str
    dry_run: bool = False
    items: List[ItemResult] = field(default_factory=list)
    output: str = ""
    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def tally_items(items: List[ItemResult]) -> Dict[str, int]:
    """Count item results per status."""
    counts = {status.value: 0 for status in ItemStatus}
    for item in items:
        counts[item.status.value] += 1
    return counts


def create_error_result(
        error: str,
        command: str,
        root: str,
        items: Optional[List[ItemResult]] = None,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> CommandResult:
    """
    Create a failed command result instance.

    Args:
        error: Detailed error description.
        command: Command that failed.
        root: Target directory of the command.
        items: Items processed before the failure, if any.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        CommandResult: An immutable error result object.
    """
    items = items or []
    summary = tally_items(items)
    summary.update(summary_extra or {})
    return CommandResult(
        ok=False,
        error=error,
        command=command,
        root=root,
        items=items,
        summary=summary,
    )


def create_success_result(
        command: str,
        root: str,
        items: List[ItemResult],
        dry_run: bool = False,
        output: str = "",
        summary_extra: Optional[Dict[str, Any]] = None,
) -> CommandResult:
    """
    Create a successful command result instance.

    Args:
        command: Executed command.
        root: Normalized root directory.
        items: Per-item outcomes.
        dry_run: Whether writes were simulated.
        output: Aggregated text ('copy' only).
        summary_extra: Final execution metrics.

    Returns:
        CommandResult: An immutable success result object.
    """
    summary = tally_items(items)
    summary.update(summary_extra or {})
    return CommandResult(
        ok=True,
        error="",
        command=command,
        root=root,
        dry_run=dry_run,
        items=items,
        output=output,
        summary=summary,
    )
