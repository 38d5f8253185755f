"""Tests for zoektd configuration."""

from __future__ import annotations

import tomllib
from pathlib import Path

import pytest
from pydantic import ValidationError

from zoektd.config import ZoektdConfig, get_default_config_toml
from zoektd.daemon.config import WebserverConfig
from zoektd.errors import ConfigError, ExitCode


class TestDefaults:
    """Test configuration defaults."""

    def test_default_config(self, tmp_path: Path) -> None:
        """Test that default config loads without errors."""
        config = ZoektdConfig(home=tmp_path, platform="linux")

        assert config.daemon.enabled is False
        assert config.daemon.repos == []
        assert config.daemon.port == 6070
        assert config.daemon.index_interval == 300
        assert config.daemon.delta is True
        assert config.daemon.branches == "HEAD"
        assert config.daemon.large_files == []
        assert config.daemon.parallelism == 4
        assert config.daemon.file_limit == 2097152
        assert config.mcp.enabled is False

    def test_ctags_defaults(self, tmp_path: Path) -> None:
        """Test ctags is enabled and required by default."""
        config = ZoektdConfig(home=tmp_path, platform="linux")

        assert config.daemon.ctags.enabled is True
        assert config.daemon.ctags.require is True

    def test_webserver_defaults(self, tmp_path: Path) -> None:
        """Test webserver default values."""
        config = ZoektdConfig(home=tmp_path, platform="linux")
        web = config.daemon.webserver

        assert web.rpc is True
        assert web.html is True
        assert web.pprof is False
        assert web.log_refresh == "24h"

    def test_home_relative_paths(self, tmp_path: Path) -> None:
        """Test index and state directories resolve under home."""
        config = ZoektdConfig(home=tmp_path, platform="linux")

        assert config.daemon.index_dir == tmp_path / ".zoekt" / "index"
        assert config.state_dir == tmp_path / ".local" / "share" / "zoektd"

    def test_linux_log_dir(self, tmp_path: Path) -> None:
        """Test the Linux webserver log directory."""
        config = ZoektdConfig(home=tmp_path, platform="linux")

        assert config.daemon.webserver.log_dir == tmp_path / ".local" / "share" / "zoekt" / "logs"

    def test_darwin_log_dir(self, tmp_path: Path) -> None:
        """Test the macOS webserver log directory."""
        config = ZoektdConfig(home=tmp_path, platform="darwin")

        assert config.daemon.webserver.log_dir == tmp_path / "Library" / "Logs"

    def test_packages_resolved(self, tmp_path: Path) -> None:
        """Test every package prefix is resolved to a path."""
        config = ZoektdConfig(home=tmp_path, platform="linux")

        assert config.daemon.package is not None
        assert config.daemon.ctags.package is not None
        assert config.mcp.package is not None
        assert config.git_package is not None

    def test_explicit_values_kept(self, tmp_path: Path) -> None:
        """Test explicit paths are not replaced by defaults."""
        config = ZoektdConfig(
            home=tmp_path,
            platform="linux",
            daemon={
                "package": "/opt/zoekt",
                "index_dir": "/data/index",
                "webserver": {"log_dir": "/data/logs"},
            },
        )

        assert config.daemon.package == Path("/opt/zoekt")
        assert config.daemon.index_dir == Path("/data/index")
        assert config.daemon.webserver.log_dir == Path("/data/logs")

    def test_auto_platform(self, tmp_path: Path) -> None:
        """Test 'auto' resolves to a concrete platform."""
        config = ZoektdConfig(home=tmp_path)

        assert config.resolved_platform in ("darwin", "linux")

    def test_repo_tilde_expanded(self, tmp_path: Path) -> None:
        """Test repository paths starting with ~ are expanded."""
        config = ZoektdConfig(home=tmp_path, daemon={"repos": ["~/code/app", "/abs/repo"]})

        assert not config.daemon.repos[0].startswith("~")
        assert config.daemon.repos[1] == "/abs/repo"


class TestValidation:
    """Test configuration validation."""

    @pytest.mark.parametrize("port", [0, -1, 65536, 70000])
    def test_invalid_port(self, tmp_path: Path, port: int) -> None:
        """Test ports outside 1-65535 are rejected."""
        with pytest.raises(ConfigError) as exc_info:
            ZoektdConfig.from_dict({"home": tmp_path, "daemon": {"port": port}})

        assert any(e.startswith("daemon.port") for e in exc_info.value.errors)

    @pytest.mark.parametrize("field", ["parallelism", "file_limit", "index_interval"])
    def test_non_positive_rejected(self, tmp_path: Path, field: str) -> None:
        """Test zero and negative counts are rejected."""
        for value in (0, -4):
            with pytest.raises(ConfigError):
                ZoektdConfig.from_dict({"home": tmp_path, "daemon": {field: value}})

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        """Test unrecognized fields are a validation error."""
        with pytest.raises(ConfigError) as exc_info:
            ZoektdConfig.from_dict({"home": tmp_path, "daemon": {"repositories": ["/src"]}})

        assert exc_info.value.exit_code == ExitCode.CONFIG_ERROR
        assert any("repositories" in e for e in exc_info.value.errors)

    def test_empty_branches_rejected(self, tmp_path: Path) -> None:
        """Test an empty branch list is rejected."""
        with pytest.raises(ConfigError):
            ZoektdConfig.from_dict({"home": tmp_path, "daemon": {"branches": ""}})

    @pytest.mark.parametrize("value", ["24h", "90m", "1h30m", "1.5h", "500ms"])
    def test_valid_log_refresh(self, value: str) -> None:
        """Test Go durations are accepted."""
        assert WebserverConfig(log_refresh=value).log_refresh == value

    @pytest.mark.parametrize("value", ["", "1 day", "24", "h"])
    def test_invalid_log_refresh(self, value: str) -> None:
        """Test non-durations are rejected."""
        with pytest.raises(ValidationError):
            WebserverConfig(log_refresh=value)

    def test_config_error_to_dict(self, tmp_path: Path) -> None:
        """Test ConfigError serializes its field errors."""
        with pytest.raises(ConfigError) as exc_info:
            ZoektdConfig.from_dict({"home": tmp_path, "daemon": {"port": 0}})

        data = exc_info.value.to_dict()
        assert data["error"] == "ConfigError"
        assert data["exit_code"] == 1
        assert data["errors"]


class TestLoad:
    """Test loading configuration from TOML and environment."""

    def test_load_from_toml(self, tmp_path: Path) -> None:
        """Test loading config from a TOML file."""
        config_file = tmp_path / "zoektd.toml"
        config_file.write_text(
            f"""
home = "{tmp_path}"
platform = "linux"

[daemon]
enabled = true
repos = ["/src/app"]
port = 6080
branches = "main,dev"

[daemon.ctags]
require = false

[mcp]
enabled = true
"""
        )

        config = ZoektdConfig.load(config_file)

        assert config.daemon.enabled is True
        assert config.daemon.repos == ["/src/app"]
        assert config.daemon.port == 6080
        assert config.daemon.branches == "main,dev"
        assert config.daemon.ctags.require is False
        assert config.mcp.enabled is True

    def test_overrides_merged(self, tmp_path: Path) -> None:
        """Test keyword overrides replace top-level file keys."""
        config_file = tmp_path / "zoektd.toml"
        config_file.write_text(f'home = "{tmp_path}"\nplatform = "linux"\n')

        config = ZoektdConfig.load(config_file, platform="darwin")

        assert config.resolved_platform == "darwin"

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test ZOEKTD_ environment variables beat file values."""
        config_file = tmp_path / "zoektd.toml"
        config_file.write_text(f'home = "{tmp_path}"\n\n[daemon]\nport = 6070\n')
        monkeypatch.setenv("ZOEKTD_DAEMON__PORT", "6090")

        config = ZoektdConfig.load(config_file)

        assert config.daemon.port == 6090

    def test_env_keeps_other_file_values(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test a nested environment variable does not drop sibling file keys."""
        config_file = tmp_path / "zoektd.toml"
        config_file.write_text(
            f'home = "{tmp_path}"\n\n[daemon]\nenabled = true\nrepos = ["/src/app"]\n'
        )
        monkeypatch.setenv("ZOEKTD_DAEMON__PORT", "6090")

        config = ZoektdConfig.load(config_file)

        assert config.daemon.port == 6090
        assert config.daemon.enabled is True
        assert config.daemon.repos == ["/src/app"]

    def test_overrides_beat_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test explicit overrides win over ZOEKTD_ environment variables."""
        config_file = tmp_path / "zoektd.toml"
        config_file.write_text(f'home = "{tmp_path}"\n')
        monkeypatch.setenv("ZOEKTD_PLATFORM", "darwin")

        config = ZoektdConfig.load(config_file, platform="linux")

        assert config.resolved_platform == "linux"
        assert config.daemon.webserver.log_dir == tmp_path / ".local" / "share" / "zoekt" / "logs"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Test unparsable TOML raises ConfigError."""
        config_file = tmp_path / "zoektd.toml"
        config_file.write_text("[daemon\nport = ")

        with pytest.raises(ConfigError):
            ZoektdConfig.load(config_file)

    def test_invalid_values_in_file(self, tmp_path: Path) -> None:
        """Test validation errors from a file surface as ConfigError."""
        config_file = tmp_path / "zoektd.toml"
        config_file.write_text(f'home = "{tmp_path}"\n\n[daemon]\nparallelism = 0\n')

        with pytest.raises(ConfigError):
            ZoektdConfig.load(config_file)

    def test_default_config_toml_is_valid(self, tmp_path: Path) -> None:
        """Test the generated default file parses and validates."""
        toml_content = get_default_config_toml()
        assert "[daemon]" in toml_content
        assert "[daemon.webserver]" in toml_content
        assert "[mcp]" in toml_content

        data = tomllib.loads(toml_content)
        config = ZoektdConfig.from_dict({**data, "home": tmp_path})

        assert config.daemon.port == 6070
        assert config.daemon.enabled is False
