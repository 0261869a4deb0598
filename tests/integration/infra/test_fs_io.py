from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, cross-platform data directory resolution
and safe directory creation.
"""

import os
from pathlib import Path
from unittest.mock import patch

from filedress.infra.fs import get_user_data_dir, normalize_path, safe_mkdir

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_windows() -> None:
    """TC-01: Resolution of %LOCALAPPDATA% on Windows systems."""
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert "filedress" in path
                assert path.lower().startswith(os.path.abspath(mock_appdata).lower())


def test_get_user_data_dir_unix() -> None:
    """TC-01: Resolution of ~/.filedress on Unix-like systems."""
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value="/home/testuser"):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert path.replace("\\", "/").endswith("/home/testuser/.filedress")


def test_normalize_path_expansion() -> None:
    """TC-02: Expansion of environment variables and user shortcuts."""
    with patch.dict(os.environ, {"TEST_VAR": "my_folder"}):
        path = normalize_path("$TEST_VAR/sub", fallback=".")
        assert path.lower().endswith(os.path.join("my_folder", "sub").lower())


def test_normalize_path_fallback() -> None:
    """TC-03: Empty input falls back and is made absolute."""
    assert normalize_path("   ", fallback=".") == os.path.abspath(".")
    assert normalize_path(None, fallback=".") == os.path.abspath(".")

# -----------------------------------------------------------------------------
# DIRECTORY CREATION TESTS
# -----------------------------------------------------------------------------

def test_safe_mkdir_creates_nested(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "c"
    ok, err = safe_mkdir(str(target))

    assert ok is True
    assert err is None
    assert target.is_dir()


def test_safe_mkdir_reports_conflict(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")

    ok, err = safe_mkdir(str(blocker / "sub"))

    assert ok is False
    assert err
