from __future__ import annotations

"""
Unit tests for the File Discovery Service.

Verifies depth bounds, extension filtering, ordering, symlink handling and
the distinction between a fatal root error and per-directory warnings.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from filedress.core.services.scanner import discover_files
from filedress.domain.errors import DiscoveryError


def _rel_paths(root: Path, extensions, depth=None):
    return [r.rel_path for r in discover_files(str(root), set(extensions), depth).records]


def test_depth_one_stays_in_root(sample_project: Path) -> None:
    """depth=1 includes project/config.py and excludes project/db/models.py."""
    found = _rel_paths(sample_project, {"py"}, depth=1)

    assert "config.py" in found
    assert "db/models.py" not in found


def test_depth_two_descends_one_level(sample_project: Path) -> None:
    assert _rel_paths(sample_project, {"py"}, depth=2) == ["config.py", "db/models.py"]


def test_unlimited_depth_and_sorted_output(sample_project: Path) -> None:
    found = _rel_paths(sample_project, {"py", "js", "css", "html", "md"})

    assert found == sorted(found)
    assert found == [
        "README.md",
        "config.py",
        "db/models.py",
        "web/app.js",
        "web/index.html",
        "web/site.css",
    ]


def test_records_carry_absolute_path_and_extension(sample_project: Path) -> None:
    record = discover_files(str(sample_project), {"css"}).records[0]

    assert record.extension == "css"
    assert os.path.isabs(record.path)
    assert record.path == str(sample_project / "web" / "site.css")


def test_extension_match_is_case_insensitive(tmp_path: Path) -> None:
    (tmp_path / "Upper.PY").write_text("x = 1\n", encoding="utf-8")
    assert _rel_paths(tmp_path, {"py"}) == ["Upper.PY"]


def test_symlinks_are_not_followed(sample_project: Path, tmp_path: Path) -> None:
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "secret.py").write_text("x = 1\n", encoding="utf-8")

    try:
        os.symlink(str(outside), str(sample_project / "linked_dir"), target_is_directory=True)
        os.symlink(str(outside / "secret.py"), str(sample_project / "linked.py"))
    except (OSError, NotImplementedError):
        pytest.skip("Symlinks are not available on this platform.")

    found = _rel_paths(sample_project, {"py"})

    assert "linked.py" not in found
    assert not any(p.startswith("linked_dir/") for p in found)


def test_missing_root_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(DiscoveryError):
        discover_files(str(tmp_path / "missing"), {"py"})


def test_unreadable_subdirectory_becomes_warning(sample_project: Path) -> None:
    """A failing subdirectory listing is recorded and the walk continues."""
    real_scandir = os.scandir
    blocked = str(sample_project / "db")

    def fake_scandir(path):
        if os.fspath(path) == blocked:
            raise PermissionError(13, "Permission denied")
        return real_scandir(path)

    with patch("filedress.core.services.scanner.os.scandir", side_effect=fake_scandir):
        result = discover_files(str(sample_project), {"py"})

    assert [r.rel_path for r in result.records] == ["config.py"]
    assert len(result.warnings) == 1
    assert result.warnings[0].path == blocked
