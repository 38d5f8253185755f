"""Daemon configuration models.

Defines configuration for the Zoekt daemon: the persistent webserver,
the periodic git indexer, and its ctags integration.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Go time.ParseDuration syntax, e.g. "24h", "90m", "1h30m", "1.5h"
GO_DURATION_RE = re.compile(r"^(\d+(\.\d+)?(ns|us|µs|ms|s|m|h))+$")

DEFAULT_BRANCHES = "HEAD"


class CtagsConfig(BaseModel):
    """universal-ctags symbol extraction settings."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(
        default=True,
        description="Enable universal-ctags for symbol extraction (enables sym: queries)",
    )
    require: bool = Field(
        default=True,
        description="Fail indexing when ctags fails (-require_ctags); false allows partial indexing",
    )
    package: Path | None = Field(
        default=None,
        description="Install prefix of universal-ctags (<package>/bin/ctags)",
    )


class WebserverConfig(BaseModel):
    """zoekt-webserver settings."""

    model_config = ConfigDict(extra="forbid")

    rpc: bool = Field(
        default=True,
        description="Enable RPC interface (-rpc); required by zoekt-mcp",
    )
    html: bool = Field(
        default=True,
        description="Enable HTML web UI; false runs headless API-only",
    )
    pprof: bool = Field(
        default=False,
        description="Enable pprof profiling endpoint (-pprof)",
    )
    log_dir: Path | None = Field(
        default=None,
        description="Directory for webserver log rotation (-log_dir)",
    )
    log_refresh: str = Field(
        default="24h",
        description="Log rotation interval (-log_refresh), Go duration format",
    )

    @field_validator("log_refresh")
    @classmethod
    def validate_log_refresh(cls, v: str) -> str:
        if not GO_DURATION_RE.match(v):
            raise ValueError(f"log_refresh must be a Go duration like '24h' or '1h30m', got: {v!r}")
        return v


class DaemonConfig(BaseModel):
    """Configuration for the Zoekt webserver and periodic indexer.

    Attributes:
        enabled: Install the webserver and indexer services
        package: Install prefix providing zoekt-webserver and zoekt-git-index
        repos: Git repository paths to index, in order
        index_dir: Directory for index shards, shared by both processes
        port: Webserver listen port
        index_interval: Seconds between indexer runs
        delta: Only re-index changed files (-delta)
        branches: Comma-separated branches to index (-branches)
        large_files: Globs indexed regardless of size (-large_file)
        parallelism: Concurrent indexing processes (-parallelism)
        file_limit: Maximum file size in bytes (-file_limit)
    """

    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(
        default=False,
        description="Enable Zoekt code search daemon",
    )
    package: Path | None = Field(
        default=None,
        description="Install prefix providing zoekt-webserver and zoekt-git-index",
    )
    repos: list[str] = Field(
        default_factory=list,
        description="Git repository paths to index",
    )
    index_dir: Path | None = Field(
        default=None,
        description="Directory for Zoekt index shards",
    )
    port: int = Field(
        default=6070,
        ge=1,
        le=65535,
        description="Zoekt webserver listen port",
    )
    index_interval: int = Field(
        default=300,
        gt=0,
        description="Re-index interval in seconds",
    )
    delta: bool = Field(
        default=True,
        description="Only re-index changed files (-delta)",
    )
    branches: str = Field(
        default=DEFAULT_BRANCHES,
        min_length=1,
        description="Comma-separated branch list to index (-branches)",
    )
    large_files: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to index regardless of size (-large_file)",
    )
    parallelism: int = Field(
        default=4,
        gt=0,
        description="Number of concurrent indexing processes (-parallelism)",
    )
    file_limit: int = Field(
        default=2097152,
        gt=0,
        description="Maximum file size in bytes to index (-file_limit), 2 MiB upstream default",
    )
    ctags: CtagsConfig = Field(default_factory=CtagsConfig)
    webserver: WebserverConfig = Field(default_factory=WebserverConfig)

    @field_validator("repos")
    @classmethod
    def expand_repos(cls, v: list[str]) -> list[str]:
        return [str(Path(r).expanduser()) if r.startswith("~") else r for r in v]

    @property
    def has_work(self) -> bool:
        """True when services should be installed (enabled with repositories)."""
        return self.enabled and bool(self.repos)


__all__ = ["CtagsConfig", "WebserverConfig", "DaemonConfig", "DEFAULT_BRANCHES"]
