from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import requests

from filedress.domain.constants import GITHUB_OWNER, GITHUB_REPO
from filedress.infra.network.common import DEFAULT_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)

GITHUB_API_URL = f"https://api.github.com/repos/{GITHUB_OWNER}/{GITHUB_REPO}/releases/latest"


def fetch_latest_version(timeout: float = DEFAULT_TIMEOUT) -> Optional[str]:
    """
    Query the GitHub API for the latest release tag.

    Returns:
        Optional[str]: Version without the leading 'v', or None when the
                       response carries no tag.

    Raises:
        requests.exceptions.RequestException: On transport or HTTP errors.
    """
    headers = {"User-Agent": USER_AGENT, "Accept": "application/vnd.github+json"}
    response = requests.get(GITHUB_API_URL, headers=headers, timeout=timeout)
    response.raise_for_status()

    tag = response.json().get("tag_name") or ""
    return tag.lstrip("v") or None


def check_for_updates(current_version: str) -> Dict[str, Any]:
    """Compare the running version against the latest GitHub release."""
    result: Dict[str, Any] = {
        "has_update": False,
        "latest_version": current_version,
        "error": None,
    }

    logger.debug(f"Checking for remote updates... (Current: v{current_version})")

    try:
        latest = fetch_latest_version()
    except (requests.exceptions.RequestException, ValueError) as e:
        msg = f"GitHub API communication failure: {e}"
        logger.debug(msg)
        result["error"] = msg
        return result

    if latest and _is_newer(current_version, latest):
        result.update({"has_update": True, "latest_version": latest})
    else:
        logger.debug("Application is currently up to date.")

    return result


def _is_newer(current: str, latest: str) -> bool:
    """Perform semantic version comparison."""
    try:
        def parse(v: str) -> Tuple[int, ...]:
            return tuple(int("".join(filter(str.isdigit, p)) or 0) for p in v.split("."))

        return parse(latest) > parse(current)
    except (ValueError, AttributeError):
        return False
