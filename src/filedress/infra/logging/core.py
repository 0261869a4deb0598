from __future__ import annotations

"""
Logging Setup.

Diagnostics go to stderr (and optionally a rotating file) through a
QueueHandler drained by a QueueListener thread, so the file workers never
block on terminal or disk I/O. Every handler installed here is tagged, which
lets a forced reconfiguration or `shutdown_logging` remove exactly those and
leave handlers added by pytest or other libraries alone.
"""

import atexit
import logging
import os
import queue
import sys
from dataclasses import dataclass
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from typing import List, Optional

from filedress.infra.fs import safe_mkdir

_HANDLER_TAG_ATTR: str = "_filedress_handler"
_CONFIGURED_FLAG_ATTR: str = "_filedress_configured"
_QUEUE_LISTENER_ATTR: str = "_filedress_queue_listener"

_CONSOLE_FORMAT = "%(levelname)s | %(message)s"
_FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging options resolved from the command line.

    Attributes:
        level: Level name ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL').
        console: Write diagnostics to stderr.
        log_file: Also append to this file, rotated by size.
        max_bytes: Rotation threshold of the log file.
        backup_count: Rotated log files kept next to it.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None
    max_bytes: int = 2 * 1024 * 1024
    backup_count: int = 3


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Route the root logger through a background queue listener.

    Calling it again is a no-op unless `force` is set, in which case the
    previously installed handlers and listener are torn down first.

    Args:
        cfg: Logging options.
        force: Re-initialize even if already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level = _parse_level(cfg.level)
    root.setLevel(level)

    _remove_our_handlers(root)
    _stop_existing_listener(root)

    sinks: List[logging.Handler] = []
    if cfg.console:
        sinks.append(_console_handler(level))
    if cfg.log_file:
        fh = _file_handler(cfg, level)
        if fh is not None:
            sinks.append(fh)

    if not sinks:
        return root

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    queue_handler = QueueHandler(log_queue)
    _tag(queue_handler)

    listener = QueueListener(log_queue, *sinks, respect_handler_level=True)
    listener.start()
    root.addHandler(queue_handler)

    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    atexit.register(_safe_stop_listener, listener)

    return root


def shutdown_logging() -> None:
    """Flush pending records and detach every handler filedress installed."""
    root = logging.getLogger()
    _stop_existing_listener(root)
    _remove_our_handlers(root)
    setattr(root, _CONFIGURED_FLAG_ATTR, False)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# ==============================================================================
# HANDLER FACTORIES
# ==============================================================================

def _console_handler(level: int) -> logging.Handler:
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level)
    sh.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    _tag(sh)
    return sh


def _file_handler(cfg: LoggingConfig, level: int) -> Optional[RotatingFileHandler]:
    """
    Open the rotating log file, creating its directory when needed.

    A log file that cannot be opened only costs the file sink: a warning is
    written to stderr and the run continues with the console alone.
    """
    path = os.path.abspath(cfg.log_file or "")
    ok, err = safe_mkdir(os.path.dirname(path))
    if not ok:
        sys.stderr.write(f"WARNING: Cannot create log directory for '{path}': {err}\n")
        return None

    try:
        fh = RotatingFileHandler(path, maxBytes=cfg.max_bytes, backupCount=cfg.backup_count, encoding="utf-8")
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{path}': {e}\n")
        return None

    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT))
    _tag(fh)
    return fh


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _tag(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _parse_level(level: str) -> int:
    """Map a level name to its numeric value, falling back to INFO."""
    name = str(level or "").strip().upper()
    if name == "WARN":
        name = "WARNING"
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if getattr(h, _HANDLER_TAG_ATTR, False):
            root.removeHandler(h)
            h.close()


def _stop_existing_listener(root: logging.Logger) -> None:
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a listener unless atexit already did after an explicit shutdown."""
    if listener is None:
        return
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
        for handler in listener.handlers:
            handler.close()
