from __future__ import annotations

"""
Integration tests for Network Infrastructure.

Utilizes mocking to verify the GitHub release check without making real
network calls.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from filedress.infra.network import check_for_updates, fetch_latest_version
from filedress.infra.network.updates_client import _is_newer


def _response(payload: dict) -> MagicMock:
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.json.return_value = payload
    return mock_response


def test_check_for_updates_newer_version() -> None:
    """TC-01: Detection of a newer version from the GitHub API."""
    with patch("requests.get", return_value=_response({"tag_name": "v9.9.9"})) as mock_get:
        result = check_for_updates("1.0.0")

    assert result["has_update"] is True
    assert result["latest_version"] == "9.9.9"
    assert result["error"] is None
    assert "User-Agent" in mock_get.call_args.kwargs["headers"]


def test_check_for_updates_same_version() -> None:
    """TC-02: No update when the release matches the running version."""
    with patch("requests.get", return_value=_response({"tag_name": "v1.0.0"})):
        result = check_for_updates("1.0.0")

    assert result["has_update"] is False
    assert result["latest_version"] == "1.0.0"


def test_check_for_updates_network_error() -> None:
    """TC-03: Transport errors are reported, never raised."""
    with patch("requests.get", side_effect=requests.exceptions.ConnectionError("offline")):
        result = check_for_updates("1.0.0")

    assert result["has_update"] is False
    assert "offline" in result["error"]


def test_check_for_updates_http_error() -> None:
    """TC-04: HTTP error statuses are reported as errors."""
    mock_response = _response({})
    mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError("403 rate limited")

    with patch("requests.get", return_value=mock_response):
        result = check_for_updates("1.0.0")

    assert result["error"] is not None


def test_fetch_latest_version_without_tag() -> None:
    with patch("requests.get", return_value=_response({})):
        assert fetch_latest_version() is None


@pytest.mark.parametrize("current, latest, expected", [
    ("1.0.0", "1.0.1", True),
    ("1.2.0", "1.10.0", True),
    ("2.0.0", "1.9.9", False),
    ("1.0.0", "1.0.0", False),
])
def test_is_newer(current: str, latest: str, expected: bool) -> None:
    assert _is_newer(current, latest) is expected
