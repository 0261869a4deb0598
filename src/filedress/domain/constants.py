from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to application-wide constants, including the
project preset table, header marker, template defaults and release metadata
used by the update checker.
"""

from typing import Dict, List

APP_NAME = "filedress"
APP_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# HEADER AND TEMPLATE DEFAULTS
# -----------------------------------------------------------------------------

HEADER_MARKER = "Path:"
DEFAULT_INDENT = 4

COMMANDS: List[str] = ["add", "remove", "clean", "copy", "structure"]
FILE_COMMANDS: List[str] = ["add", "remove", "clean", "copy"]

# -----------------------------------------------------------------------------
# PROJECT PRESETS
# -----------------------------------------------------------------------------

PROJECT_PRESETS: Dict[str, List[str]] = {
    "rust": ["rs"],
    "python": ["py"],
    "web": ["ts", "js", "jsx", "tsx", "svelte", "vue", "html", "css", "scss"],
    "java": ["java", "xml"],
    "flutter": ["dart"],
}

# -----------------------------------------------------------------------------
# COPY AGGREGATION FORMAT
# -----------------------------------------------------------------------------

COPY_ENTRY_HEADER = "FILE: {label}\n---\n\n"
COPY_ENTRY_SEPARATOR = "\n\n---\n"

# -----------------------------------------------------------------------------
# UPDATE CHECK
# -----------------------------------------------------------------------------

GITHUB_OWNER = "Netajam"
GITHUB_REPO = "filedress"
UPDATE_CHECK_INTERVAL_HOURS = 24
UPDATE_DISABLE_ENV = "FILEDRESS_NO_UPDATE_CHECK"
INSTALL_COMMAND_POSIX = "curl -sSfL https://Netajam.github.io/filedress/install.sh | sh"
INSTALL_COMMAND_WINDOWS = "iwr https://Netajam.github.io/filedress/install.ps1 -useb | iex"
