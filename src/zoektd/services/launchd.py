"""launchd (macOS) renderer.

Each unit becomes a per-user agent plist in ~/Library/LaunchAgents.
launchd has no ordering between agents, so ``PeriodicTask.after`` is
not rendered.
"""

from __future__ import annotations

import logging
import plistlib
from typing import Any

from zoektd.services.units import (
    PeriodicTask,
    PersistentService,
    RenderedFile,
    RestartPolicy,
    ServicePlan,
    Unit,
)

logger = logging.getLogger(__name__)


def _common_keys(unit: Unit) -> dict[str, Any]:
    data: dict[str, Any] = {
        "Label": unit.label,
        "ProgramArguments": [unit.command, *unit.args],
        "RunAtLoad": True,
    }
    if unit.environment:
        data["EnvironmentVariables"] = dict(unit.environment)
    if unit.log_dir is not None:
        data["StandardOutPath"] = str(unit.log_dir / f"{unit.name}.log")
        data["StandardErrorPath"] = str(unit.log_dir / f"{unit.name}.err")
    return data


def service_plist(unit: PersistentService) -> dict[str, Any]:
    """Build the plist dictionary for a persistent service."""
    data = _common_keys(unit)
    data["KeepAlive"] = unit.restart is RestartPolicy.ALWAYS
    return data


def periodic_plist(unit: PeriodicTask) -> dict[str, Any]:
    """Build the plist dictionary for an interval-triggered task."""
    if unit.after:
        logger.debug(f"launchd cannot order {unit.label} after {', '.join(unit.after)}; ignoring")
    data = _common_keys(unit)
    data["StartInterval"] = unit.interval
    return data


def plist_filename(unit: Unit) -> str:
    return f"{unit.label}.plist"


def render_unit(unit: Unit) -> RenderedFile:
    """Render one unit as plist XML."""
    if isinstance(unit, PersistentService):
        data = service_plist(unit)
    else:
        data = periodic_plist(unit)
    content = plistlib.dumps(data, sort_keys=False).decode("utf-8")
    return RenderedFile(filename=plist_filename(unit), content=content, unit_name=unit.name)


def render(plan: ServicePlan) -> list[RenderedFile]:
    """Render every unit of a plan as agent plists."""
    return [render_unit(unit) for unit in plan.units]


__all__ = ["service_plist", "periodic_plist", "plist_filename", "render_unit", "render"]
