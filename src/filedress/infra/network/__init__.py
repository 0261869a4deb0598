from __future__ import annotations

"""
Network Communication Infrastructure.

Orchestrates external HTTP interactions. The only remote endpoint filedress
talks to is the GitHub releases API used by the update check.
"""

from filedress.infra.network.updates_client import (
    check_for_updates,
    fetch_latest_version,
)

__all__ = [
    "check_for_updates",
    "fetch_latest_version",
]
