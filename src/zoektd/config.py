"""Configuration models for zoektd."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import (
    BaseSettings,
    EnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    SettingsError,
)

from zoektd.daemon.config import DaemonConfig
from zoektd.errors import ConfigError
from zoektd.mcp.entry import McpConfig
from zoektd.paths import (
    CONFIG_FILE,
    CTAGS_EXECUTABLE,
    GIT_EXECUTABLE,
    MCP_EXECUTABLE,
    WEBSERVER_NAME,
    Platform,
    current_platform,
    find_package_prefix,
    get_default_index_dir,
    get_default_log_dir,
    get_default_state_dir,
    get_user_config_path,
)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged

class ZoektdConfig(BaseSettings):
    """Main zoektd configuration.

    Path and package defaults that depend on the home directory, the
    platform or the host PATH are resolved once, when the model is
    validated. Every generator receives the resolved model.
    """

    model_config = SettingsConfigDict(
        env_prefix="ZOEKTD_",
        env_nested_delimiter="__",
        extra="forbid",
    )

    home: Path = Field(
        default_factory=Path.home,
        description="Home directory all per-user paths are relative to",
    )
    platform: Literal["auto", "darwin", "linux"] = Field(
        default="auto",
        description="Target platform (auto detects the running host)",
    )
    git_package: Path | None = Field(
        default=None,
        description="Install prefix providing git",
    )
    state_dir: Path | None = Field(
        default=None,
        description="Directory for the generated indexer wrapper script",
    )
    daemon: DaemonConfig = Field(default_factory=DaemonConfig)
    mcp: McpConfig = Field(default_factory=McpConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # load() merges the environment between file values and overrides
        return init_settings, env_settings

    @model_validator(mode="after")
    def resolve_defaults(self) -> ZoektdConfig:
        platform = self.resolved_platform
        daemon = self.daemon

        if daemon.index_dir is None:
            daemon.index_dir = get_default_index_dir(self.home)
        if daemon.webserver.log_dir is None:
            daemon.webserver.log_dir = get_default_log_dir(self.home, platform)
        if daemon.package is None:
            daemon.package = find_package_prefix(WEBSERVER_NAME)
        if daemon.ctags.package is None:
            daemon.ctags.package = find_package_prefix(CTAGS_EXECUTABLE)
        if self.mcp.package is None:
            self.mcp.package = find_package_prefix(MCP_EXECUTABLE)
        if self.git_package is None:
            self.git_package = find_package_prefix(GIT_EXECUTABLE)
        if self.state_dir is None:
            self.state_dir = get_default_state_dir(self.home)

        daemon.index_dir = daemon.index_dir.expanduser()
        daemon.webserver.log_dir = daemon.webserver.log_dir.expanduser()
        self.state_dir = self.state_dir.expanduser()
        return self

    @property
    def resolved_platform(self) -> Platform:
        """Target platform with 'auto' resolved to the running host."""
        if self.platform == "auto":
            return current_platform()
        return self.platform

    @classmethod
    def load(cls, config_path: Path | None = None, **overrides: Any) -> ZoektdConfig:
        """Load configuration from file and environment.

        Resolution order (highest to lowest priority):
        1. Keyword overrides (explicit command-line options)
        2. Environment variables (ZOEKTD_DAEMON__PORT=6080)
        3. Provided config file path
        4. zoektd.toml in current directory
        5. ~/.config/zoektd/zoektd.toml
        6. Built-in defaults

        Raises:
            ConfigError: If the file cannot be parsed or fails validation
        """
        config_data: dict[str, Any] = {}

        locations = []
        if config_path:
            locations.append(config_path)
        locations.extend(
            [
                Path.cwd() / CONFIG_FILE,
                get_user_config_path(Path.home()),
            ]
        )

        for loc in locations:
            if loc.exists():
                try:
                    with open(loc, "rb") as f:
                        config_data = tomllib.load(f)
                except (OSError, tomllib.TOMLDecodeError) as e:
                    raise ConfigError(f"Cannot read {loc}: {e}", path=str(loc)) from e
                break

        try:
            env_data = EnvSettingsSource(cls)()
        except SettingsError as e:
            raise ConfigError(f"Invalid ZOEKTD_ environment variable: {e}") from e
        config_data = _deep_merge(config_data, env_data)
        config_data = _deep_merge(config_data, overrides)
        return cls.from_dict(config_data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ZoektdConfig:
        """Validate a configuration mapping.

        Raises:
            ConfigError: With one message per invalid field
        """
        try:
            return cls(**data)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            ]
            raise ConfigError("Invalid configuration", errors=errors) from e


def get_default_config_toml() -> str:
    """Generate default zoektd.toml content."""
    return """# zoektd configuration
# Environment overrides use ZOEKTD_ and "__" for nesting, e.g. ZOEKTD_DAEMON__PORT=6080

# platform = "auto"  # auto | darwin | linux
# git_package = "/usr"  # Prefix of git (default: found on PATH)
# state_dir = "~/.local/share/zoektd"  # Where the indexer wrapper is written

[daemon]
enabled = false
repos = [
    # "/home/user/code/myrepo",
]
# index_dir = "~/.zoekt/index"
# package = "/usr/local"  # Prefix providing zoekt-webserver and zoekt-git-index
port = 6070
index_interval = 300  # Seconds between indexer runs
delta = true  # Only re-index changed files
branches = "HEAD"  # Comma-separated, e.g. "main,dev"
large_files = []  # Globs indexed regardless of size, e.g. ["*.min.js"]
parallelism = 4
file_limit = 2097152  # Bytes (2 MiB)

[daemon.ctags]
enabled = true
require = true  # false allows partial indexing when ctags fails

[daemon.webserver]
rpc = true  # Required by zoekt-mcp
html = true
pprof = false
# log_dir = "~/Library/Logs" (macOS) or "~/.local/share/zoekt/logs" (Linux)
log_refresh = "24h"

[mcp]
enabled = false
# package = "/usr/local"  # Prefix providing zoekt-mcp

[mcp.env]
# RUST_LOG = "info"
"""


__all__ = ["ZoektdConfig", "get_default_config_toml"]
