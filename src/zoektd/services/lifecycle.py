"""Service lifecycle management.

Installs, removes and checks the generated services: writes the wrapper
script and unit files, and asks launchctl or systemctl to (de)activate
them.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx

from zoektd.config import ZoektdConfig
from zoektd.daemon.args import synthesize
from zoektd.daemon.wrapper import build_indexer_script, write_indexer_script
from zoektd.errors import BootstrapError, SupervisorError
from zoektd.mcp.entry import endpoint_url
from zoektd.paths import (
    INDEXER_NAME,
    LABEL_PREFIX,
    WEBSERVER_NAME,
    get_indexer_script_path,
    get_unit_dir,
)
from zoektd.services import systemd
from zoektd.services.bootstrap import ensure_directories
from zoektd.services.emitter import build_plan, render_plan
from zoektd.services.units import ServicePlan

logger = logging.getLogger(__name__)

# Timeout for the webserver health probe
STATUS_TIMEOUT = 2.0

# Timeout for launchctl/systemctl calls
SUPERVISOR_TIMEOUT = 30.0


@dataclass
class InstallResult:
    """Outcome of an install run."""

    platform: str
    created_dirs: list[Path] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)
    activated: bool = False

    @property
    def installed(self) -> bool:
        return bool(self.written)


class ServiceLifecycle:
    """Install, uninstall and inspect the zoekt services.

    Attributes:
        config: Resolved configuration
        unit_dir: Directory the supervisor reads unit files from
    """

    def __init__(self, config: ZoektdConfig, unit_dir: Path | None = None) -> None:
        """Initialize the lifecycle manager.

        Args:
            config: Resolved configuration
            unit_dir: Override for the supervisor's unit directory
        """
        self.config = config
        self.platform = config.resolved_platform
        self.unit_dir = unit_dir or get_unit_dir(config.home, self.platform)

    @property
    def script_path(self) -> Path:
        return get_indexer_script_path(self.config.state_dir)

    def install(self, load: bool = True) -> InstallResult:
        """Bootstrap directories, write the wrapper and unit files, activate.

        When the plan is empty nothing is written, and services left by an
        earlier install are stopped and removed. Directories are created
        before any file is written; a failure there leaves the unit
        directory untouched.

        Args:
            load: Activate the units with the platform supervisor

        Returns:
            InstallResult describing what changed

        Raises:
            BootstrapError: If directories or files cannot be written
            SupervisorError: If activation fails
        """
        result = InstallResult(platform=self.platform)
        args = synthesize(self.config.daemon)
        plan = build_plan(self.config, args)
        if plan.is_empty:
            logger.info("Nothing to install: daemon disabled or no repositories")
            result.removed = self.uninstall(unload=load)
            return result

        result.created_dirs = ensure_directories(self.config)

        script = build_indexer_script(self.config, args.indexer_args)
        result.written.append(write_indexer_script(self.script_path, script))

        try:
            self.unit_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BootstrapError(str(self.unit_dir), str(e)) from e

        for rendered in render_plan(plan):
            path = self.unit_dir / rendered.filename
            try:
                path.write_text(rendered.content)
            except OSError as e:
                raise BootstrapError(str(path), str(e), action="write") from e
            logger.debug(f"Wrote {path}")
            result.written.append(path)

        if load:
            self._activate(plan)
            result.activated = True

        logger.info(f"Installed {len(plan.units)} services for {self.platform}")
        return result

    def uninstall(self, unload: bool = True) -> list[Path]:
        """Deactivate the services and remove their files.

        Returns:
            Files that were removed
        """
        if unload and any(p.exists() for p in self._unit_paths()):
            self._deactivate()

        removed: list[Path] = []
        for path in [*self._unit_paths(), self.script_path]:
            if not path.exists():
                continue
            try:
                path.unlink()
            except OSError as e:
                logger.warning(f"Failed to remove {path}: {e}")
                continue
            removed.append(path)
        if removed and self.platform == "linux" and unload:
            self._run(["systemctl", "--user", "daemon-reload"], check=False)
        return removed

    def status(self) -> dict[str, Any]:
        """Report installed unit files and webserver reachability."""
        url = endpoint_url(self.config.daemon.port)
        status: dict[str, Any] = {
            "platform": self.platform,
            "url": url,
            "units": {str(p): p.exists() for p in self._unit_paths()},
            "wrapper": self.script_path.exists(),
        }

        try:
            response = httpx.get(f"{url}/healthz", timeout=STATUS_TIMEOUT)
            status["healthy"] = response.status_code == 200
            status["status_code"] = response.status_code
        except httpx.RequestError:
            status["healthy"] = False

        status["status"] = "running" if status["healthy"] else "stopped"
        return status

    def _unit_paths(self) -> list[Path]:
        if self.platform == "darwin":
            names = [f"{LABEL_PREFIX}.{n}.plist" for n in (WEBSERVER_NAME, INDEXER_NAME)]
        else:
            names = [f"{WEBSERVER_NAME}.service", f"{INDEXER_NAME}.service", f"{INDEXER_NAME}.timer"]
        return [self.unit_dir / name for name in names]

    def _activate(self, plan: ServicePlan) -> None:
        if plan.platform == "darwin":
            for path in self._unit_paths():
                # Reload picks up changed plists; unload fails harmlessly when not loaded
                self._run(["launchctl", "unload", str(path)], check=False)
                self._run(["launchctl", "load", "-w", str(path)])
        else:
            self._run(["systemctl", "--user", "daemon-reload"])
            self._run(["systemctl", "--user", "enable", "--now", *systemd.activation_targets(plan)])

    def _deactivate(self) -> None:
        if self.platform == "darwin":
            for path in self._unit_paths():
                if path.exists():
                    self._run(["launchctl", "unload", "-w", str(path)], check=False)
        else:
            self._run(
                [
                    "systemctl",
                    "--user",
                    "disable",
                    "--now",
                    f"{WEBSERVER_NAME}.service",
                    f"{INDEXER_NAME}.timer",
                ],
                check=False,
            )

    def _run(self, command: list[str], check: bool = True) -> subprocess.CompletedProcess[str]:
        logger.debug(f"Running: {' '.join(command)}")
        try:
            proc = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=SUPERVISOR_TIMEOUT,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            if check:
                raise SupervisorError(command, -1, str(e)) from e
            logger.debug(f"Ignoring failure of {command[0]}: {e}")
            return subprocess.CompletedProcess(command, -1, "", str(e))

        if check and proc.returncode != 0:
            raise SupervisorError(command, proc.returncode, proc.stderr.strip())
        return proc


__all__ = ["InstallResult", "ServiceLifecycle", "STATUS_TIMEOUT"]
