from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes,
stream output (stdout/stderr) and file system side effects.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "filedress" / "main.py"


def run_cli(args: List[str], cwd: Optional[Path] = None, stdin: Optional[str] = None) -> subprocess.CompletedProcess:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH so the package resolves
    without being installed, and disables the update check.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["FILEDRESS_NO_UPDATE_CHECK"] = "1"

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        input=stdin,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )

# -----------------------------------------------------------------------------
# TESTS
# -----------------------------------------------------------------------------

def test_version_flag() -> None:
    result = run_cli(["--version"])

    assert result.returncode == 0
    assert result.stdout.startswith("filedress ")


def test_help_lists_commands() -> None:
    result = run_cli(["--help"])

    assert result.returncode == 0
    for command in ("add", "remove", "clean", "copy", "structure"):
        assert command in result.stdout


def test_add_remove_roundtrip(sample_project: Path) -> None:
    target = sample_project / "db" / "models.py"
    original = target.read_bytes()

    added = run_cli(["add", "--project", "python"], cwd=sample_project)
    assert added.returncode == 0, added.stderr
    assert target.read_text(encoding="utf-8").startswith("# Path: project/db/models.py\n")

    removed = run_cli(["remove", "--project", "python"], cwd=sample_project)
    assert removed.returncode == 0, removed.stderr
    assert target.read_bytes() == original


def test_copy_to_stdout_is_pipe_clean(sample_project: Path) -> None:
    result = run_cli(["copy", str(sample_project), "--exts", "py", "--stdout"])

    assert result.returncode == 0, result.stderr
    assert result.stdout == (
        "FILE: project/config.py\n---\n\n"
        "DEBUG = True  # toggled in prod\n"
        "\n\n---\n"
        "FILE: project/db/models.py\n---\n\n"
        "class User:\n    pass\n"
    )
    assert "Done. Copied: 2" in result.stderr


def test_structure_from_stdin(tmp_path: Path) -> None:
    template = "my_app/\n    src/\n        main.rs\n    tests/\n"

    result = run_cli(["structure", "-d", str(tmp_path)], stdin=template)

    assert result.returncode == 0, result.stderr
    assert (tmp_path / "my_app" / "src" / "main.rs").is_file()
    assert (tmp_path / "my_app" / "tests").is_dir()


def test_invalid_preset_exit_code(sample_project: Path) -> None:
    result = run_cli(["add", str(sample_project), "--project", "cobol"])

    assert result.returncode == 2
    assert "cobol" in result.stderr


def test_missing_directory_exit_code(tmp_path: Path) -> None:
    result = run_cli(["copy", str(tmp_path / "nowhere"), "--stdout"])

    assert result.returncode == 2
    assert result.stdout == ""
