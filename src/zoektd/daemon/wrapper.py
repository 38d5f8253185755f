"""Indexer wrapper script.

The periodic task does not run zoekt-git-index directly. It runs a small
shell script that resets the launchd log files, puts ctags, zoekt and git
on PATH (zoekt-git-index finds ctags and git by name), then ``exec``s the
indexer. Because of the ``exec`` no shell remains: the indexer's exit
status and signals reach the supervisor unchanged.
"""

from __future__ import annotations

import logging
import os
import shlex
from collections.abc import Sequence
from pathlib import Path

from zoektd.config import ZoektdConfig
from zoektd.errors import BootstrapError
from zoektd.paths import (
    INDEXER_EXECUTABLE,
    INDEXER_NAME,
    bin_dir,
    get_launchd_log_dir,
)

logger = logging.getLogger(__name__)

SCRIPT_MODE = 0o755


def indexer_search_path(config: ZoektdConfig) -> list[str]:
    """PATH entries prepended for the indexer, highest priority first."""
    entries: list[str] = []
    if config.daemon.ctags.enabled and config.daemon.ctags.package is not None:
        entries.append(str(bin_dir(config.daemon.ctags.package)))
    if config.daemon.package is not None:
        entries.append(str(bin_dir(config.daemon.package)))
    if config.git_package is not None:
        entries.append(str(bin_dir(config.git_package)))
    return entries


def _quote_path_entries(entries: list[str]) -> str:
    # Double quotes so the trailing $PATH still expands
    escaped = [e.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$") for e in entries]
    return '"' + ":".join([*escaped, "$PATH"]) + '"'


def build_indexer_script(config: ZoektdConfig, indexer_args: Sequence[str]) -> str:
    """Render the indexer wrapper script.

    Args:
        config: Resolved configuration
        indexer_args: Output of ``synthesize_indexer_args``

    Returns:
        POSIX shell script text
    """
    lines = ["#!/bin/sh", "# Generated by zoektd. Do not edit.", "set -e", ""]

    if config.resolved_platform == "darwin":
        log_dir = shlex.quote(str(get_launchd_log_dir(config.home)))
        lines.extend(
            [
                f"logDir={log_dir}",
                f': > "$logDir/{INDEXER_NAME}.log"',
                f': > "$logDir/{INDEXER_NAME}.err"',
                "",
            ]
        )

    lines.append(f"export PATH={_quote_path_entries(indexer_search_path(config))}")

    command = [INDEXER_EXECUTABLE, *indexer_args]
    lines.append("exec " + " \\\n  ".join(shlex.quote(arg) for arg in command))
    return "\n".join(lines) + "\n"


def write_indexer_script(path: Path, content: str) -> Path:
    """Write the wrapper script and mark it executable.

    Raises:
        BootstrapError: If the script cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        os.chmod(path, SCRIPT_MODE)
    except OSError as e:
        raise BootstrapError(str(path), str(e), action="write") from e
    logger.debug(f"Wrote indexer wrapper: {path}")
    return path


__all__ = [
    "SCRIPT_MODE",
    "indexer_search_path",
    "build_indexer_script",
    "write_indexer_script",
]
