"""Platform-neutral service unit descriptions.

A unit says what to run and how it is supervised. The launchd and
systemd renderers turn the same units into their native formats, so
argument vectors are built once per generation pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from zoektd.paths import Platform


class RestartPolicy(str, Enum):
    """How the supervisor treats an exited process."""

    ALWAYS = "always"  # Kept alive indefinitely
    NEVER = "never"  # Runs to completion, next run is timer driven


@dataclass(frozen=True)
class PersistentService:
    """A long-running process the supervisor keeps alive.

    Attributes:
        name: Unit name (systemd unit stem, log file stem)
        label: launchd label
        description: Human readable description
        command: Absolute path of the executable
        args: Argument vector, excluding the executable
        environment: Extra environment variables
        log_dir: Directory for stdout/stderr files, where the platform uses them
        pre_start: Directories created before each start, where supported
    """

    name: str
    label: str
    description: str
    command: str
    args: tuple[str, ...] = ()
    environment: dict[str, str] = field(default_factory=dict)
    log_dir: Path | None = None
    restart: RestartPolicy = RestartPolicy.ALWAYS
    pre_start: tuple[Path, ...] = ()


@dataclass(frozen=True)
class PeriodicTask:
    """A process started every ``interval`` seconds.

    ``after`` names units this task is ordered after; only platforms with
    an ordering mechanism set it.
    """

    name: str
    label: str
    description: str
    command: str
    interval: int
    args: tuple[str, ...] = ()
    environment: dict[str, str] = field(default_factory=dict)
    log_dir: Path | None = None
    after: tuple[str, ...] = ()


Unit = PersistentService | PeriodicTask


@dataclass(frozen=True)
class ServicePlan:
    """Units generated for one platform family.

    A plan is either empty (nothing to index) or holds both the webserver
    and the indexer; it never holds only one of them.
    """

    platform: Platform
    units: tuple[Unit, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.units

    @property
    def services(self) -> list[PersistentService]:
        return [u for u in self.units if isinstance(u, PersistentService)]

    @property
    def periodic_tasks(self) -> list[PeriodicTask]:
        return [u for u in self.units if isinstance(u, PeriodicTask)]

    def get(self, name: str) -> Unit | None:
        """Find a unit by name."""
        for unit in self.units:
            if unit.name == name:
                return unit
        return None


@dataclass(frozen=True)
class RenderedFile:
    """A unit file ready to be written to the supervisor's directory."""

    filename: str
    content: str
    unit_name: str


__all__ = [
    "RestartPolicy",
    "PersistentService",
    "PeriodicTask",
    "Unit",
    "ServicePlan",
    "RenderedFile",
]
