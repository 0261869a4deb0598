from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, mapping of arguments into
configuration overrides, command execution and result rendering. Fatal
errors are mapped to process exit codes; per-file failures are reported in
the final tally and do not change the exit code.
"""

import argparse
import json
import sys
from dataclasses import asdict
from typing import List, Optional, TextIO

from filedress.core.pipeline.engine import run_command
from filedress.core.services.updater import UpdateChecker
from filedress.domain.errors import ConfigError, ParseError
from filedress.domain.pipeline_models import CommandResult, ItemStatus
from filedress.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from filedress.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

UPDATE_NOTICE_WAIT_SECONDS = 1.0

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 fatal runtime failure,
             2 configuration or template error, 130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr, optional rotating file)
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file), force=True)

    try:
        return _execute(args)
    finally:
        shutdown_logging()


def _execute(args: argparse.Namespace) -> int:
    """Run the parsed command and render its result."""
    updater = None
    if not args.no_update_check:
        updater = UpdateChecker()
        updater.start()

    overrides = cli_args.args_to_overrides(args)
    logger.debug(f"CLI overrides: {overrides}")

    # 3. Command execution phase
    try:
        result = run_command(overrides)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return EXIT_INTERRUPTED
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_USAGE
    except ParseError as e:
        logger.error(f"Template error: {e}")
        return EXIT_USAGE

    # 4. Output rendering phase
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        stdout_payload = result.ok and result.summary.get("destination") == "stdout"
        if stdout_payload:
            sys.stdout.write(result.output)
            sys.stdout.flush()
        _print_human_summary(result, sys.stderr if stdout_payload else sys.stdout)

    if updater is not None:
        updater.wait(UPDATE_NOTICE_WAIT_SECONDS)

    return EXIT_OK if result.ok else EXIT_FAILURE

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: CommandResult, stream: TextIO) -> None:
    """
    Format and print the command result.

    Args:
        result: The command result to render.
        stream: Destination; stderr when stdout carries the copied content.
    """
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)

    for item in result.items:
        if item.status is ItemStatus.FAILED:
            print(f"  failed: {item.path}: {item.detail}", file=sys.stderr)

    prefix = "[DRY RUN] " if result.dry_run else ""
    counts = result.summary

    if result.command == "structure":
        line = (
            f"{prefix}Done. Created: {counts['created']}, "
            f"Skipped: {counts['skipped']}, Failed: {counts['failed']}"
        )
    elif result.command == "copy":
        line = (
            f"Done. Copied: {counts['copied']}, Failed: {counts['failed']}"
        )
        destination = counts.get("destination")
        if destination:
            line += f" ({counts.get('bytes', 0)} bytes to {destination})"
    else:
        line = (
            f"{prefix}Done. Changed: {counts['changed']}, "
            f"Skipped: {counts['skipped']}, Failed: {counts['failed']}"
        )

    if counts.get("warning"):
        line += f", Warnings: {counts['warning']}"

    print(line, file=stream)

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
