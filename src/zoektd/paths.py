"""Centralized path definitions for zoektd.

Per-user layout, relative to the home directory:

    ~/.zoekt/index/                       # Index shards (shared by both processes)
    ~/.config/zoektd/zoektd.toml          # User configuration
    ~/.local/share/zoektd/zoekt-indexer   # Generated indexer wrapper script

    macOS (launchd):
    ~/Library/LaunchAgents/<label>.plist  # Agent definitions
    ~/Library/Logs/                       # Agent stdout/stderr + webserver logs

    Linux (systemd --user):
    ~/.config/systemd/user/               # Unit files
    ~/.local/share/zoekt/logs/            # Webserver logs
"""

from __future__ import annotations

import shutil
import sys
from pathlib import Path
from typing import Literal

Platform = Literal["darwin", "linux"]

# Unit and executable names
WEBSERVER_NAME = "zoekt-webserver"
INDEXER_NAME = "zoekt-indexer"
INDEXER_EXECUTABLE = "zoekt-git-index"
MCP_EXECUTABLE = "zoekt-mcp"
CTAGS_EXECUTABLE = "ctags"
GIT_EXECUTABLE = "git"

# launchd label namespace
LABEL_PREFIX = "io.pleme"

# Config file names
CONFIG_FILE = "zoektd.toml"
USER_CONFIG_DIR = ".config/zoektd"

# Fallback install prefix when an executable is not on PATH
DEFAULT_PREFIX = Path("/usr/local")


def current_platform() -> Platform:
    """Return the platform family of the running host."""
    return "darwin" if sys.platform == "darwin" else "linux"


def get_default_index_dir(home: Path) -> Path:
    """Get the default index shard directory (~/.zoekt/index)."""
    return home / ".zoekt" / "index"


def get_default_log_dir(home: Path, platform: Platform) -> Path:
    """Get the webserver log directory for a platform.

    Args:
        home: User home directory
        platform: Target platform family

    Returns:
        ~/Library/Logs on macOS, ~/.local/share/zoekt/logs on Linux
    """
    if platform == "darwin":
        return get_launchd_log_dir(home)
    return home / ".local" / "share" / "zoekt" / "logs"


def get_launchd_log_dir(home: Path) -> Path:
    """Get the per-user launchd log directory (~/Library/Logs)."""
    return home / "Library" / "Logs"


def get_default_state_dir(home: Path) -> Path:
    """Get the directory holding generated scripts (~/.local/share/zoektd)."""
    return home / ".local" / "share" / "zoektd"


def get_indexer_script_path(state_dir: Path) -> Path:
    """Get the path of the generated indexer wrapper script."""
    return state_dir / INDEXER_NAME


def get_unit_dir(home: Path, platform: Platform) -> Path:
    """Get the directory the platform supervisor reads unit files from.

    Args:
        home: User home directory
        platform: Target platform family

    Returns:
        ~/Library/LaunchAgents on macOS, ~/.config/systemd/user on Linux
    """
    if platform == "darwin":
        return home / "Library" / "LaunchAgents"
    return home / ".config" / "systemd" / "user"


def get_user_config_path(home: Path) -> Path:
    """Get the per-user configuration file path."""
    return home / USER_CONFIG_DIR / CONFIG_FILE


def find_package_prefix(executable: str, fallback: Path = DEFAULT_PREFIX) -> Path:
    """Find the install prefix of an executable on PATH.

    The prefix is the parent of the ``bin`` directory holding the
    executable, so ``<prefix>/bin/<executable>`` resolves back to it.

    Args:
        executable: Executable name to look up
        fallback: Prefix returned when the executable is not found

    Returns:
        Install prefix of the executable
    """
    found = shutil.which(executable)
    if found is None:
        return fallback
    return Path(found).resolve().parent.parent


def bin_dir(prefix: Path) -> Path:
    """Get the ``bin`` directory of an install prefix."""
    return prefix / "bin"


__all__ = [
    "Platform",
    # Names
    "WEBSERVER_NAME",
    "INDEXER_NAME",
    "INDEXER_EXECUTABLE",
    "MCP_EXECUTABLE",
    "CTAGS_EXECUTABLE",
    "GIT_EXECUTABLE",
    "LABEL_PREFIX",
    "CONFIG_FILE",
    "USER_CONFIG_DIR",
    "DEFAULT_PREFIX",
    # Path getters
    "current_platform",
    "get_default_index_dir",
    "get_default_log_dir",
    "get_launchd_log_dir",
    "get_default_state_dir",
    "get_indexer_script_path",
    "get_unit_dir",
    "get_user_config_path",
    # Helpers
    "find_package_prefix",
    "bin_dir",
]
