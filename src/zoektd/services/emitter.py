"""Service plan generation.

Turns the resolved configuration into platform-neutral units and hands
them to the launchd or systemd renderer.
"""

from __future__ import annotations

import logging
from pathlib import Path

from zoektd.config import ZoektdConfig
from zoektd.daemon.args import SynthesizedArguments, synthesize
from zoektd.paths import (
    INDEXER_NAME,
    LABEL_PREFIX,
    WEBSERVER_NAME,
    Platform,
    bin_dir,
    get_indexer_script_path,
    get_launchd_log_dir,
)
from zoektd.services import launchd, systemd
from zoektd.services.units import (
    PeriodicTask,
    PersistentService,
    RenderedFile,
    RestartPolicy,
    ServicePlan,
)

logger = logging.getLogger(__name__)


def _label(name: str) -> str:
    return f"{LABEL_PREFIX}.{name}"


def webserver_unit(
    config: ZoektdConfig, args: SynthesizedArguments, platform: Platform
) -> PersistentService:
    """Describe the zoekt-webserver service."""
    daemon = config.daemon
    if platform == "darwin":
        log_dir: Path | None = get_launchd_log_dir(config.home)
        pre_start: tuple[Path, ...] = ()
    else:
        # journald collects output; directories are (re)created before start
        log_dir = None
        pre_start = (daemon.index_dir, daemon.webserver.log_dir)

    return PersistentService(
        name=WEBSERVER_NAME,
        label=_label(WEBSERVER_NAME),
        description="Zoekt webserver - trigram-indexed code search",
        command=str(bin_dir(daemon.package) / WEBSERVER_NAME),
        args=args.webserver_args,
        log_dir=log_dir,
        restart=RestartPolicy.ALWAYS,
        pre_start=pre_start,
    )


def indexer_unit(config: ZoektdConfig, platform: Platform) -> PeriodicTask:
    """Describe the periodic indexer task, which runs the wrapper script."""
    if platform == "darwin":
        log_dir: Path | None = get_launchd_log_dir(config.home)
        after: tuple[str, ...] = ()
    else:
        log_dir = None
        after = (f"{WEBSERVER_NAME}.service",)

    return PeriodicTask(
        name=INDEXER_NAME,
        label=_label(INDEXER_NAME),
        description="Zoekt periodic indexer",
        command=str(get_indexer_script_path(config.state_dir)),
        interval=config.daemon.index_interval,
        log_dir=log_dir,
        after=after,
    )


def build_plan(config: ZoektdConfig, args: SynthesizedArguments | None = None) -> ServicePlan:
    """Build the service plan for the configured platform.

    The daemon must be enabled and have repositories; otherwise the plan
    is empty. Both units are produced together or not at all. The platform
    is always the one the configuration was resolved for, so log paths in
    the arguments and in the units agree; reload the configuration with
    another platform to target it.

    Args:
        config: Resolved configuration
        args: Pre-computed arguments (default: synthesized from config)

    Returns:
        ServicePlan for the configured platform
    """
    platform = config.resolved_platform

    if not config.daemon.enabled:
        logger.debug("Daemon disabled; no services generated")
        return ServicePlan(platform=platform)
    if not config.daemon.repos:
        logger.debug("No repositories configured; no services generated")
        return ServicePlan(platform=platform)

    args = args or synthesize(config.daemon)
    return ServicePlan(
        platform=platform,
        units=(
            webserver_unit(config, args, platform),
            indexer_unit(config, platform),
        ),
    )


def render_plan(plan: ServicePlan) -> list[RenderedFile]:
    """Render a plan in its platform's native unit format."""
    if plan.platform == "darwin":
        return launchd.render(plan)
    return systemd.render(plan)


__all__ = ["webserver_unit", "indexer_unit", "build_plan", "render_plan"]
