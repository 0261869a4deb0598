from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema: one sub-command per operation,
shared discovery flags and global diagnostic flags. Provides the logic to
translate the raw argparse namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from filedress.domain.constants import APP_NAME, APP_VERSION, DEFAULT_INDENT, PROJECT_PRESETS

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the filedress CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Dress source files with path headers, strip comments, "
                    "copy code for sharing and scaffold directory trees.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    _add_global_arguments(p)

    # Global flags are also accepted after the sub-command.
    common = argparse.ArgumentParser(add_help=False)
    _add_global_arguments(common, default=argparse.SUPPRESS)

    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # --- Header commands ---
    add = sub.add_parser("add", parents=[common], help="Add a path header to each matching file.")
    _add_discovery_arguments(add)
    add.add_argument(
        "-f", "--force",
        action="store_true",
        help="Overwrite an existing path header.",
    )
    _add_dry_run_argument(add)

    remove = sub.add_parser("remove", parents=[common], help="Remove the path header from each matching file.")
    _add_discovery_arguments(remove)
    _add_dry_run_argument(remove)

    clean = sub.add_parser("clean", parents=[common], help="Remove all comments except the path header.")
    _add_discovery_arguments(clean)
    _add_dry_run_argument(clean)

    # --- Aggregation ---
    copy = sub.add_parser("copy", parents=[common], help="Copy the contents of matching files with their path labels.")
    _add_discovery_arguments(copy)
    copy.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help="Write the aggregated content to this file instead of the clipboard.",
    )
    copy.add_argument(
        "--stdout",
        dest="to_stdout",
        action="store_true",
        help="Print the aggregated content to stdout instead of the clipboard.",
    )

    # --- Scaffolding ---
    structure = sub.add_parser("structure", parents=[common], help="Create a directory tree from an indented template.")
    structure.add_argument(
        "-f", "--file",
        dest="template_file",
        default=None,
        help="Template file (read from stdin if omitted).",
    )
    structure.add_argument(
        "-d", "--directory",
        dest="directory",
        default=".",
        help="Target directory for the new tree (default: current directory).",
    )
    structure.add_argument(
        "-i", "--indent",
        type=int,
        default=DEFAULT_INDENT,
        help=f"Spaces per indentation level (default: {DEFAULT_INDENT}).",
    )
    _add_dry_run_argument(structure)

    return p


def _add_global_arguments(p: argparse.ArgumentParser, default: Any = None) -> None:
    """Diagnostic and output flags available on every command."""
    p.add_argument(
        "--debug",
        action="store_true",
        default=False if default is None else default,
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=default,
        help="Also write logs to a rotating file at this path.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        default=False if default is None else default,
        help="Print the command result as JSON.",
    )
    p.add_argument(
        "--no-update-check",
        action="store_true",
        default=False if default is None else default,
        help="Skip the daily check for a newer release.",
    )


def _add_discovery_arguments(p: argparse.ArgumentParser) -> None:
    """Flags shared by every command that walks a directory."""
    p.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Root directory to process (default: current directory).",
    )
    p.add_argument(
        "--project",
        default=None,
        help=f"Project preset selecting extensions ({', '.join(PROJECT_PRESETS)}).",
    )
    p.add_argument(
        "--exts",
        dest="extensions",
        default=None,
        help="Comma-separated extensions to process (e.g. 'py,rs'). Combined with --project.",
    )
    p.add_argument(
        "-u", "--up",
        type=int,
        default=0,
        help="Number of parent directories to include in the path label.",
    )
    p.add_argument(
        "-d", "--depth",
        type=int,
        default=None,
        help="Maximum traversal depth (1 = files directly in the directory).",
    )


def _add_dry_run_argument(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would change without writing anything.",
    )

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Flags a sub-command does not define are simply absent from the overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {"command": args.command}

    for key in ("directory", "project", "up", "depth", "output_path", "template_file", "indent"):
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value

    if getattr(args, "extensions", None) is not None:
        overrides["extensions"] = _split_csv(args.extensions)

    for flag in ("force", "dry_run", "to_stdout"):
        if getattr(args, flag, False):
            overrides[flag] = True

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of sanitized strings."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
