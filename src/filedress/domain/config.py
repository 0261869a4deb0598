from __future__ import annotations

"""
Runtime Configuration Defaults.

Handles the dict-based session configuration that drives every command.
Values are never persisted; the CLI layer merges its overrides into these
defaults before validation.
"""

import os
from typing import Any, Dict

from filedress.domain.constants import DEFAULT_INDENT

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        "command": "add",

        # Discovery
        "directory": os.getcwd(),
        "project": None,
        "extensions": None,
        "up": 0,
        "depth": None,

        # Header transformation
        "force": False,
        "dry_run": False,

        # Copy delivery
        "output_path": None,
        "to_stdout": False,

        # Structure
        "template_file": None,
        "indent": DEFAULT_INDENT,
    }
