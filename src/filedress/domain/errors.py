from __future__ import annotations

"""
Exception hierarchy for filedress.

Fatal conditions (configuration, template parsing, an unreadable root) abort
the command; per-path conditions (discovery, transform) are collected as item
outcomes and never abort a batch.
"""

from typing import Any, Dict, Optional


class FiledressError(Exception):
    """Base exception for all filedress errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class ConfigError(FiledressError):
    """Raised when flags or their combination are invalid."""
    pass


class DiscoveryError(FiledressError):
    """Raised (or recorded) when a directory or file cannot be read during a walk."""

    def __init__(self, message: str, path: str = "", context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.path = path


class TransformError(FiledressError):
    """Raised when a single file cannot be transformed or written."""

    def __init__(self, message: str, path: str = "", context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.path = path


class ClipboardError(FiledressError):
    """Raised when the system clipboard cannot receive the aggregated text."""
    pass


class ParseError(FiledressError):
    """Raised when a scaffold template is malformed or cannot be read."""

    def __init__(self, message: str, line_number: int = 0, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.line_number = line_number

    def __str__(self) -> str:
        if self.line_number:
            return f"line {self.line_number}: {self.message}"
        return self.message
