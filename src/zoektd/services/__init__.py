"""Platform service generation and installation.

Builds a platform-neutral ServicePlan (webserver + periodic indexer) from
the configuration, renders it as launchd agents on macOS or systemd user
units on Linux, and installs it.

Example:
    >>> from zoektd.config import ZoektdConfig
    >>> from zoektd.services import build_plan, render_plan
    >>>
    >>> config = ZoektdConfig(platform="linux", daemon={"enabled": True, "repos": ["/src/app"]})
    >>> [f.filename for f in render_plan(build_plan(config))]
    ['zoekt-webserver.service', 'zoekt-indexer.service', 'zoekt-indexer.timer']
"""

from zoektd.services.bootstrap import ensure_directories
from zoektd.services.emitter import build_plan, render_plan
from zoektd.services.lifecycle import InstallResult, ServiceLifecycle
from zoektd.services.units import (
    PeriodicTask,
    PersistentService,
    RenderedFile,
    RestartPolicy,
    ServicePlan,
)

__all__ = [
    # Units
    "PersistentService",
    "PeriodicTask",
    "RestartPolicy",
    "ServicePlan",
    "RenderedFile",
    # Generation
    "build_plan",
    "render_plan",
    # Bootstrap
    "ensure_directories",
    # Lifecycle
    "InstallResult",
    "ServiceLifecycle",
]
