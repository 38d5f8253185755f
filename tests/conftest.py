"""Shared fixtures for zoektd tests."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from zoektd.config import ZoektdConfig

ConfigFactory = Callable[..., ZoektdConfig]


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ZOEKTD_* variables from the host out of tests."""
    for key in list(os.environ):
        if key.startswith("ZOEKTD_"):
            monkeypatch.delenv(key)


@pytest.fixture
def make_config(tmp_path: Path) -> ConfigFactory:
    """Build a resolved config rooted at tmp_path with fixed package prefixes.

    Keyword arguments are daemon settings; ``platform`` and ``mcp`` are
    passed through to the root config.
    """

    def factory(platform: str = "linux", mcp: dict[str, Any] | None = None, **daemon: Any) -> ZoektdConfig:
        daemon_data: dict[str, Any] = {
            "enabled": True,
            "repos": ["/src/alpha"],
            "package": "/opt/zoekt",
        }
        ctags = daemon.pop("ctags", {})
        daemon_data.update(daemon)
        daemon_data["ctags"] = {"package": "/opt/ctags", **ctags}
        return ZoektdConfig(
            home=tmp_path / "home",
            platform=platform,
            git_package=Path("/opt/git"),
            daemon=daemon_data,
            mcp={"package": "/opt/zoekt-mcp", **(mcp or {})},
        )

    return factory
