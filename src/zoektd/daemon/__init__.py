"""Zoekt daemon - persistent webserver plus periodic git indexer.

The daemon is two processes sharing one index directory:

- zoekt-webserver serves search queries (HTTP UI and JSON/RPC API)
- zoekt-git-index runs on an interval, writing new shards for the
  configured repositories

Example:
    >>> from zoektd.daemon import DaemonConfig, synthesize
    >>> from pathlib import Path
    >>>
    >>> daemon = DaemonConfig(repos=["/src/zoekt"], index_dir=Path("/idx"))
    >>> synthesize(daemon).indexer_args[:2]
    ('-index', '/idx')

The indexer wrapper script lives in ``zoektd.daemon.wrapper``; it needs
the root configuration and is imported from there directly.
"""

from zoektd.daemon.args import (
    SynthesizedArguments,
    synthesize,
    synthesize_indexer_args,
    synthesize_webserver_args,
)
from zoektd.daemon.config import CtagsConfig, DaemonConfig, WebserverConfig

__all__ = [
    # Configuration
    "CtagsConfig",
    "DaemonConfig",
    "WebserverConfig",
    # Arguments
    "SynthesizedArguments",
    "synthesize",
    "synthesize_indexer_args",
    "synthesize_webserver_args",
]
