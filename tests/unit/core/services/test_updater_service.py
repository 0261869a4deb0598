from __future__ import annotations

"""
Unit tests for the Update Check Service.

Verifies throttling through the state file, the environment kill switch,
and the notice printed when a newer release exists.
"""

import io
import json
import time
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from filedress.core.services.updater import UpdateChecker, UpdateStatus


@pytest.fixture
def checker(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> UpdateChecker:
    """UpdateChecker writing its state under tmp_path with the check enabled."""
    monkeypatch.delenv("FILEDRESS_NO_UPDATE_CHECK", raising=False)
    return UpdateChecker(current_version="1.0.0", state_dir=str(tmp_path), stream=io.StringIO())


def test_check_due_without_state_file(checker: UpdateChecker) -> None:
    assert checker.should_check() is True


def test_check_throttled_within_interval(checker: UpdateChecker) -> None:
    now = time.time()
    Path(checker.state_path).write_text(json.dumps({"last_checked": int(now) - 3600}), encoding="utf-8")

    assert checker.should_check(now=now) is False
    assert checker.should_check(now=now + 24 * 3600) is True


def test_corrupt_state_file_means_check_due(checker: UpdateChecker) -> None:
    Path(checker.state_path).write_text("not json", encoding="utf-8")
    assert checker.should_check() is True


def test_env_var_disables_check(checker: UpdateChecker, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FILEDRESS_NO_UPDATE_CHECK", "1")

    assert checker.should_check() is False
    assert checker.start() is None
    assert checker.status is UpdateStatus.SKIPPED


@patch("filedress.core.services.updater.network.check_for_updates")
def test_run_check_prints_notice(mock_check: MagicMock, checker: UpdateChecker) -> None:
    mock_check.return_value = {"has_update": True, "latest_version": "9.9.9", "error": None}

    checker.run_check()

    assert checker.status is UpdateStatus.AVAILABLE
    assert checker.latest_version == "9.9.9"
    notice = checker._stream.getvalue()
    assert "v9.9.9" in notice
    assert "To update, run:" in notice
    assert Path(checker.state_path).exists()


@patch("filedress.core.services.updater.network.check_for_updates")
def test_run_check_error_is_silent_and_stamps_state(mock_check: MagicMock, checker: UpdateChecker) -> None:
    mock_check.return_value = {"has_update": False, "latest_version": "1.0.0", "error": "offline"}

    checker.run_check()

    assert checker.status is UpdateStatus.ERROR
    assert checker._stream.getvalue() == ""
    assert checker.should_check() is False


@patch("filedress.core.services.updater.network.check_for_updates")
def test_start_runs_on_daemon_thread(mock_check: MagicMock, checker: UpdateChecker) -> None:
    mock_check.return_value = {"has_update": False, "latest_version": "1.0.0", "error": None}

    thread = checker.start()
    assert thread is not None
    assert thread.daemon is True

    checker.wait(5)
    assert checker.status is UpdateStatus.UP_TO_DATE
