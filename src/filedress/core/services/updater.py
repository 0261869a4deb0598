from __future__ import annotations

"""
Update Check Service.

Runs a once-a-day check for a newer release on a daemon thread. The check
never blocks or fails a command: network errors are logged at DEBUG and the
notice, when there is one, goes to stderr so piped stdout stays clean.
"""

import json
import logging
import os
import sys
import threading
import time
from enum import Enum
from typing import Any, Dict, Optional, TextIO

from filedress.domain.constants import (
    APP_NAME,
    APP_VERSION,
    INSTALL_COMMAND_POSIX,
    INSTALL_COMMAND_WINDOWS,
    UPDATE_CHECK_INTERVAL_HOURS,
    UPDATE_DISABLE_ENV,
)
from filedress.infra import network
from filedress.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

STATE_FILE_NAME = "update.json"


# -----------------------------------------------------------------------------
# UPDATE STATE DEFINITIONS
# -----------------------------------------------------------------------------

class UpdateStatus(Enum):
    """States of the background update check."""
    IDLE = "IDLE"
    SKIPPED = "SKIPPED"
    CHECKING = "CHECKING"
    UP_TO_DATE = "UP_TO_DATE"
    AVAILABLE = "AVAILABLE"
    ERROR = "ERROR"


# -----------------------------------------------------------------------------
# UPDATE CHECKER SERVICE
# -----------------------------------------------------------------------------

class UpdateChecker:
    """
    Throttled, fire-and-forget release check.

    The last check time is stored as a Unix timestamp in
    '<user data dir>/update.json' and is refreshed after every attempt,
    successful or not, so an offline machine is not probed on every run.
    """

    def __init__(
            self,
            current_version: str = APP_VERSION,
            state_dir: Optional[str] = None,
            interval_hours: int = UPDATE_CHECK_INTERVAL_HOURS,
            stream: Optional[TextIO] = None,
    ) -> None:
        self._current_version = current_version
        self._state_dir = state_dir
        self._interval_seconds = interval_hours * 3600
        self._stream = stream
        self._status = UpdateStatus.IDLE
        self._latest_version: str = ""
        self._thread: Optional[threading.Thread] = None

    @property
    def status(self) -> UpdateStatus:
        return self._status

    @property
    def latest_version(self) -> str:
        return self._latest_version

    @property
    def state_path(self) -> str:
        base = self._state_dir or get_user_data_dir()
        return os.path.join(base, STATE_FILE_NAME)

    # -- scheduling ------------------------------------------------------------

    @staticmethod
    def is_disabled_by_env() -> bool:
        value = os.environ.get(UPDATE_DISABLE_ENV, "").strip().lower()
        return value not in ("", "0", "false", "no")

    def should_check(self, now: Optional[float] = None) -> bool:
        """
        Decide whether the check interval has elapsed.

        A missing or unreadable state file means a check is due.
        """
        if self.is_disabled_by_env():
            return False

        state = self._read_state()
        last_checked = state.get("last_checked") if state else None
        if not isinstance(last_checked, (int, float)):
            return True

        now = time.time() if now is None else now
        return now - last_checked >= self._interval_seconds

    def start(self) -> Optional[threading.Thread]:
        """
        Launch the check on a daemon thread if one is due.

        Returns:
            Optional[threading.Thread]: The started thread, or None if skipped.
        """
        if not self.should_check():
            self._status = UpdateStatus.SKIPPED
            return None

        self._thread = threading.Thread(target=self.run_check, name="UpdateChecker", daemon=True)
        self._thread.start()
        return self._thread

    def wait(self, timeout: float) -> None:
        """Give a running check up to `timeout` seconds to finish."""
        if self._thread is not None:
            self._thread.join(timeout)

    # -- execution -------------------------------------------------------------

    def run_check(self) -> None:
        """Query the release API, print a notice if newer, and stamp the state file."""
        self._status = UpdateStatus.CHECKING

        res = network.check_for_updates(self._current_version)
        if res.get("error"):
            self._status = UpdateStatus.ERROR
        elif res.get("has_update"):
            self._latest_version = res["latest_version"]
            self._status = UpdateStatus.AVAILABLE
            self._print_notice(self._latest_version)
        else:
            self._status = UpdateStatus.UP_TO_DATE

        self._write_state()

    # -- private helpers -------------------------------------------------------

    def _print_notice(self, new_version: str) -> None:
        install_command = INSTALL_COMMAND_WINDOWS if os.name == "nt" else INSTALL_COMMAND_POSIX
        stream = self._stream or sys.stderr
        print(
            f"\nA new version of {APP_NAME} (v{new_version}) is available!\n"
            f"   To update, run: {install_command}\n",
            file=stream,
        )

    def _read_state(self) -> Optional[Dict[str, Any]]:
        try:
            with open(self.state_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            return None
        return data if isinstance(data, dict) else None

    def _write_state(self) -> None:
        path = self.state_path
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump({"last_checked": int(time.time())}, f, indent=2)
        except OSError as e:
            logger.debug(f"Could not persist update check state: {e}")
