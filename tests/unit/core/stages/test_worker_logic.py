from __future__ import annotations

"""
Unit tests for the Atomic Header Worker.

Verifies that each file yields exactly one ItemResult and that I/O and
decoding problems are reported as FAILED rather than raised.
"""

from pathlib import Path
from unittest.mock import patch

from filedress.core.pipeline.stages.worker import process_file_task
from filedress.domain.pipeline_models import FileRecord, ItemStatus


def _record(path: Path, root: Path) -> FileRecord:
    rel = path.relative_to(root).as_posix()
    return FileRecord(path=str(path), extension=path.suffix.lstrip(".").lower(), rel_path=rel)


def test_add_writes_header(sample_project: Path) -> None:
    target = sample_project / "db" / "models.py"
    result = process_file_task(_record(target, sample_project), str(sample_project), 0, "add")

    assert result.status is ItemStatus.CHANGED
    assert result.detail == "added"
    assert target.read_text(encoding="utf-8").startswith("# Path: project/db/models.py\n")


def test_dry_run_does_not_write(sample_project: Path) -> None:
    target = sample_project / "config.py"
    before = target.read_bytes()

    result = process_file_task(_record(target, sample_project), str(sample_project), 0, "add", dry_run=True)

    assert result.status is ItemStatus.CHANGED
    assert "dry run" in result.detail
    assert target.read_bytes() == before


def test_noop_is_reported_as_skipped(sample_project: Path) -> None:
    target = sample_project / "config.py"
    result = process_file_task(_record(target, sample_project), str(sample_project), 0, "remove")

    assert result.status is ItemStatus.SKIPPED
    assert result.detail == "no header found"


def test_unsupported_extension_is_skipped(sample_project: Path) -> None:
    target = sample_project / "notes.txt"
    result = process_file_task(_record(target, sample_project), str(sample_project), 0, "add")

    assert result.status is ItemStatus.SKIPPED
    assert result.detail == "skipped-unsupported-extension"
    assert target.read_text(encoding="utf-8") == "plain notes\n"


def test_invalid_utf8_is_failed(tmp_path: Path) -> None:
    target = tmp_path / "legacy.py"
    target.write_bytes(b"s = '\xff'\n")

    result = process_file_task(_record(target, tmp_path), str(tmp_path), 0, "add")

    assert result.status is ItemStatus.FAILED
    assert "UTF-8" in result.detail
    assert target.read_bytes() == b"s = '\xff'\n"


def test_write_failure_is_failed(sample_project: Path) -> None:
    target = sample_project / "config.py"

    with patch("filedress.core.pipeline.stages.worker.atomic_write", side_effect=PermissionError(13, "Permission denied")):
        result = process_file_task(_record(target, sample_project), str(sample_project), 0, "add")

    assert result.status is ItemStatus.FAILED
    assert "Write failed" in result.detail


def test_missing_file_is_failed(tmp_path: Path) -> None:
    record = FileRecord(path=str(tmp_path / "gone.py"), extension="py", rel_path="gone.py")
    result = process_file_task(record, str(tmp_path), 0, "add")

    assert result.status is ItemStatus.FAILED
