from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Isolation from the network-backed update check.
3. Shared fixtures for sample project trees and configuration dictionaries.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def no_update_check(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep every test offline unless it explicitly re-enables the check."""
    monkeypatch.setenv("FILEDRESS_NO_UPDATE_CHECK", "1")


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Create a small mixed-language project.

    Structure:
    /project
      config.py
      README.md
      notes.txt
      /db
        models.py
      /web
        index.html
        site.css
        app.js
    """
    root = tmp_path / "project"
    (root / "db").mkdir(parents=True)
    (root / "web").mkdir()

    (root / "config.py").write_text("DEBUG = True  # toggled in prod\n", encoding="utf-8")
    (root / "README.md").write_text("# Project\n", encoding="utf-8")
    (root / "notes.txt").write_text("plain notes\n", encoding="utf-8")
    (root / "db" / "models.py").write_text("class User:\n    pass\n", encoding="utf-8")
    (root / "web" / "index.html").write_text("<html></html>\n", encoding="utf-8")
    (root / "web" / "site.css").write_text("body { color: red; }\n", encoding="utf-8")
    (root / "web" / "app.js").write_text("const url = 'http://x'; // entry\n", encoding="utf-8")

    return root


@pytest.fixture
def mock_config_dict(sample_project: Path) -> Dict[str, Any]:
    """
    Return a complete configuration dictionary for the sample project.

    Mirrors the keys defined in 'filedress.domain.config'.
    """
    return {
        "command": "add",
        "directory": str(sample_project),
        "project": None,
        "extensions": None,
        "up": 0,
        "depth": None,
        "force": False,
        "dry_run": False,
        "output_path": None,
        "to_stdout": False,
        "template_file": None,
        "indent": 4,
    }
