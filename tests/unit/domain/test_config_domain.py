from __future__ import annotations

"""
Unit tests for the runtime configuration defaults.
"""

import os

from filedress.domain.config import get_default_config


def test_default_config_keys() -> None:
    cfg = get_default_config()

    assert cfg["command"] == "add"
    assert cfg["directory"] == os.getcwd()
    assert cfg["up"] == 0
    assert cfg["depth"] is None
    assert cfg["indent"] == 4
    assert cfg["force"] is False


def test_default_config_is_a_fresh_copy() -> None:
    a = get_default_config()
    a["up"] = 5
    assert get_default_config()["up"] == 0
