from __future__ import annotations

"""
Configuration Validation Service.

Acts as the primary gatekeeper for the command engine, ensuring that the
configuration dictionary conforms to the expected schema. Handles type
coercion, path normalization and default value injection. Any value that
cannot be repaired raises ConfigError before a single file is touched.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from filedress.core.pipeline.components.filters import normalize_extensions
from filedress.domain.config import get_default_config
from filedress.domain.constants import COMMANDS, FILE_COMMANDS, PROJECT_PRESETS
from filedress.domain.errors import ConfigError
from filedress.infra.fs import normalize_path

logger = logging.getLogger(__name__)

_DRY_RUN_COMMANDS = ("add", "remove", "clean", "structure")


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(config: Any) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Converts untrusted inputs (e.g. from the CLI) into strictly typed
    parameters and fills missing keys with defaults.

    Args:
        config: Raw configuration data (usually a dictionary).

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and a
                                          list of coercion warnings.

    Raises:
        ConfigError: If any flag is invalid or flags are combined illegally.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        raise ConfigError(f"Invalid config type: expected dict, received {type(config).__name__}.")

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if v is not None})

    # 1. Command
    command = _as_str(merged.get("command"), "", "command", warnings).lower()
    if command not in COMMANDS:
        raise ConfigError(f"Unknown command '{command}'. Expected one of: {', '.join(COMMANDS)}.")
    merged["command"] = command

    # 2. Booleans
    for field in ("force", "dry_run", "to_stdout"):
        merged[field] = _as_bool(merged.get(field), bool(defaults[field]), field, warnings)

    # 3. Numbers
    merged["up"] = _as_int(merged.get("up"), "up", warnings)
    if merged["up"] < 0:
        raise ConfigError(f"--up must be 0 or greater (got {merged['up']}).")

    depth = merged.get("depth")
    if depth is not None:
        depth = _as_int(depth, "depth", warnings)
        if depth < 1:
            raise ConfigError(f"--depth must be 1 or greater (got {depth}).")
    merged["depth"] = depth

    merged["indent"] = _as_int(merged.get("indent"), "indent", warnings)
    if merged["indent"] < 1:
        raise ConfigError(f"--indent must be 1 or greater (got {merged['indent']}).")

    # 4. Discovery filters
    merged["project"] = _validate_project(merged.get("project"))
    merged["extensions"] = _validate_extensions(merged.get("extensions"), warnings)

    # 5. Paths
    merged["directory"] = normalize_path(
        _as_str(merged.get("directory"), "", "directory", warnings), fallback=os.getcwd()
    )
    for field in ("output_path", "template_file"):
        value = _as_optional_str(merged.get(field), field, warnings)
        merged[field] = normalize_path(value, fallback=os.getcwd()) if value else None

    # 6. Cross-field constraints
    if merged["force"] and command != "add":
        raise ConfigError("--force only applies to the 'add' command.")
    if merged["dry_run"] and command not in _DRY_RUN_COMMANDS:
        raise ConfigError(f"--dry-run is not supported by the '{command}' command.")
    if command == "copy" and merged["output_path"] and merged["to_stdout"]:
        raise ConfigError("--output and --stdout cannot be combined.")

    if command in FILE_COMMANDS and not os.path.isdir(merged["directory"]):
        raise ConfigError(f"Directory does not exist: {merged['directory']}")

    for w in warnings:
        logger.debug(f"Config coercion: {w}")

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str]) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback
    if isinstance(value, os.PathLike):
        warnings.append(f"Field '{field}' converted from path object to str.")
        return os.fspath(value)
    raise ConfigError(f"Invalid field '{field}': expected str, received {type(value).__name__}.")


def _as_optional_str(value: Any, field: str, warnings: List[str]) -> Optional[str]:
    s = _as_str(value, "", field, warnings)
    return s or None


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str]) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback
    if isinstance(value, (int, float)) and value in (0, 1):
        warnings.append(f"Field '{field}' converted from number {value} to bool.")
        return bool(value)
    if isinstance(value, str):
        s = value.strip().lower()
        if s in ("true", "1", "yes", "y"):
            warnings.append(f"Field '{field}' converted from '{value}' to True.")
            return True
        if s in ("false", "0", "no", "n"):
            warnings.append(f"Field '{field}' converted from '{value}' to False.")
            return False
    raise ConfigError(f"Invalid field '{field}': expected bool, received {type(value).__name__}.")


def _as_int(value: Any, field: str, warnings: List[str]) -> int:
    """Coerce integers and numeric strings into native ints."""
    if isinstance(value, bool):
        raise ConfigError(f"Invalid field '{field}': expected int, received bool.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            raise ConfigError(f"Invalid field '{field}': '{value}' is not an integer.") from None
        warnings.append(f"Field '{field}' converted from '{value}' to {parsed}.")
        return parsed
    raise ConfigError(f"Invalid field '{field}': expected int, received {type(value).__name__}.")


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _validate_project(value: Any) -> Optional[str]:
    """Ensure the preset name exists in the preset table."""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ConfigError(f"Invalid field 'project': expected str, received {type(value).__name__}.")
    name = value.strip().lower()
    if name not in PROJECT_PRESETS:
        raise ConfigError(
            f"Unknown project preset '{value}'. Expected one of: {', '.join(sorted(PROJECT_PRESETS))}."
        )
    return name


def _validate_extensions(value: Any, warnings: List[str]) -> Optional[List[str]]:
    """Accept a list or CSV string of extensions; reject an explicitly empty set."""
    if value is None:
        return None

    if isinstance(value, str):
        warnings.append("Field 'extensions' converted from CSV string to list.")
        value = value.split(",")

    if not isinstance(value, (list, tuple, set)):
        raise ConfigError(f"Invalid field 'extensions': expected list[str], received {type(value).__name__}.")

    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise ConfigError(f"Invalid item in 'extensions[{i}]': expected str.")

    exts = normalize_extensions(value)
    if not exts:
        raise ConfigError("--exts was given but contains no extensions.")
    return exts
