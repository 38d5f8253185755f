"""Directory bootstrap.

Creates the directories the services point at. Runs to completion before
any unit is written or activated, and is safe to repeat.
"""

from __future__ import annotations

import logging
from pathlib import Path

from zoektd.config import ZoektdConfig
from zoektd.errors import BootstrapError

logger = logging.getLogger(__name__)


def required_directories(config: ZoektdConfig) -> list[Path]:
    """Directories both services and the wrapper script rely on."""
    return [
        config.daemon.index_dir,
        config.daemon.webserver.log_dir,
        config.state_dir,
    ]


def ensure_directories(config: ZoektdConfig) -> list[Path]:
    """Create the index, log and state directories.

    Args:
        config: Resolved configuration

    Returns:
        Directories that did not exist before the call

    Raises:
        BootstrapError: If a directory cannot be created
    """
    created: list[Path] = []
    for directory in required_directories(config):
        if directory.is_dir():
            continue
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BootstrapError(str(directory), e.strerror or str(e)) from e
        logger.debug(f"Created {directory}")
        created.append(directory)
    return created


__all__ = ["required_directories", "ensure_directories"]
