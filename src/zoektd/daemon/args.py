"""Command-line synthesis for zoekt-git-index and zoekt-webserver.

Each flag group is a pure function of the daemon configuration. Groups
are applied in the order they are listed in ``INDEXER_FLAG_GROUPS`` and
``WEBSERVER_FLAG_GROUPS``; new features get a new group at a fixed
position rather than ad-hoc list surgery.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from zoektd.daemon.config import DEFAULT_BRANCHES, DaemonConfig

FlagGroup = Callable[[DaemonConfig], list[str]]


@dataclass(frozen=True)
class SynthesizedArguments:
    """Argument vectors for one generation pass."""

    indexer_args: tuple[str, ...]
    webserver_args: tuple[str, ...]


# =============================================================================
# zoekt-git-index
# =============================================================================


def _index_dir_flags(daemon: DaemonConfig) -> list[str]:
    return ["-index", str(daemon.index_dir)]


def _ctags_flags(daemon: DaemonConfig) -> list[str]:
    if not daemon.ctags.enabled:
        return ["-disable_ctags"]
    if daemon.ctags.require:
        return ["-require_ctags"]
    # Enabled but not required: ctags failures are tolerated
    return []


def _delta_flags(daemon: DaemonConfig) -> list[str]:
    return ["-delta"] if daemon.delta else []


def _branch_flags(daemon: DaemonConfig) -> list[str]:
    if daemon.branches == DEFAULT_BRANCHES:
        return []
    return ["-branches", daemon.branches]


def _large_file_flags(daemon: DaemonConfig) -> list[str]:
    args: list[str] = []
    for pattern in daemon.large_files:
        args.extend(["-large_file", pattern])
    return args


def _parallelism_flags(daemon: DaemonConfig) -> list[str]:
    return ["-parallelism", str(daemon.parallelism)]


def _file_limit_flags(daemon: DaemonConfig) -> list[str]:
    return ["-file_limit", str(daemon.file_limit)]


def _repo_args(daemon: DaemonConfig) -> list[str]:
    return list(daemon.repos)


INDEXER_FLAG_GROUPS: tuple[FlagGroup, ...] = (
    _index_dir_flags,
    _ctags_flags,
    _delta_flags,
    _branch_flags,
    _large_file_flags,
    _parallelism_flags,
    _file_limit_flags,
    _repo_args,
)


# =============================================================================
# zoekt-webserver
# =============================================================================


def _server_base_flags(daemon: DaemonConfig) -> list[str]:
    return [
        "-index",
        str(daemon.index_dir),
        "-listen",
        f":{daemon.port}",
        "-log_dir",
        str(daemon.webserver.log_dir),
        "-log_refresh",
        daemon.webserver.log_refresh,
    ]


def _rpc_flags(daemon: DaemonConfig) -> list[str]:
    return ["-rpc"] if daemon.webserver.rpc else []


def _pprof_flags(daemon: DaemonConfig) -> list[str]:
    return ["-pprof"] if daemon.webserver.pprof else []


def _html_flags(daemon: DaemonConfig) -> list[str]:
    # HTML UI is the webserver default, only the opt-out is spelled out
    return [] if daemon.webserver.html else ["-html=false"]


WEBSERVER_FLAG_GROUPS: tuple[FlagGroup, ...] = (
    _server_base_flags,
    _rpc_flags,
    _pprof_flags,
    _html_flags,
)


def _apply(groups: tuple[FlagGroup, ...], daemon: DaemonConfig) -> tuple[str, ...]:
    args: list[str] = []
    for group in groups:
        args.extend(group(daemon))
    return tuple(args)


def synthesize_indexer_args(daemon: DaemonConfig) -> tuple[str, ...]:
    """Build the zoekt-git-index argument vector (without the executable).

    Args:
        daemon: Validated daemon configuration with index_dir resolved

    Returns:
        Ordered arguments, ending with the repository paths
    """
    return _apply(INDEXER_FLAG_GROUPS, daemon)


def synthesize_webserver_args(daemon: DaemonConfig) -> tuple[str, ...]:
    """Build the zoekt-webserver argument vector (without the executable).

    Args:
        daemon: Validated daemon configuration with index_dir and log_dir resolved

    Returns:
        Ordered arguments
    """
    return _apply(WEBSERVER_FLAG_GROUPS, daemon)


def synthesize(daemon: DaemonConfig) -> SynthesizedArguments:
    """Build both argument vectors for one generation pass."""
    return SynthesizedArguments(
        indexer_args=synthesize_indexer_args(daemon),
        webserver_args=synthesize_webserver_args(daemon),
    )


__all__ = [
    "SynthesizedArguments",
    "INDEXER_FLAG_GROUPS",
    "WEBSERVER_FLAG_GROUPS",
    "synthesize_indexer_args",
    "synthesize_webserver_args",
    "synthesize",
]
