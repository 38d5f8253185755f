"""systemd --user (Linux) renderer.

A persistent service becomes one ``.service`` unit. A periodic task
becomes a oneshot ``.service`` plus a ``.timer`` that activates it;
``PeriodicTask.after`` is rendered as ``After=`` on the oneshot service.
"""

from __future__ import annotations

import re

from zoektd.services.units import (
    PeriodicTask,
    PersistentService,
    RenderedFile,
    RestartPolicy,
    ServicePlan,
    Unit,
)

# Delay of the first indexer run after the user manager starts
FIRST_RUN_DELAY_SECONDS = 60
RESTART_DELAY_SECONDS = 5
MKDIR_COMMAND = ("/usr/bin/env", "mkdir", "-p")

_NEEDS_QUOTING = re.compile(r"[\s\"'\\;]")


def quote_exec_arg(arg: str) -> str:
    """Quote one argument for an Exec*= line.

    ``%`` and ``$`` are doubled so systemd does not expand specifiers or
    environment variables inside them.
    """
    arg = arg.replace("%", "%%").replace("$", "$$")
    if arg and not _NEEDS_QUOTING.search(arg):
        return arg
    escaped = arg.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def exec_line(command: str, args: tuple[str, ...] | list[str]) -> str:
    return " ".join(quote_exec_arg(a) for a in (command, *args))


def _environment_lines(unit: Unit) -> list[str]:
    lines = []
    for key, value in unit.environment.items():
        escaped = f"{key}={value}".replace("\\", "\\\\").replace('"', '\\"').replace("%", "%%")
        lines.append(f'Environment="{escaped}"')
    return lines


def _sections(sections: list[tuple[str, list[str]]]) -> str:
    blocks = []
    for title, lines in sections:
        blocks.append("\n".join([f"[{title}]", *lines]))
    return "\n\n".join(blocks) + "\n"


def service_unit(unit: PersistentService) -> str:
    """Render a persistent service as a ``.service`` unit."""
    service = ["Type=simple"]
    if unit.pre_start:
        pre = [str(p) for p in unit.pre_start]
        service.append(f"ExecStartPre={exec_line(MKDIR_COMMAND[0], [*MKDIR_COMMAND[1:], *pre])}")
    service.append(f"ExecStart={exec_line(unit.command, unit.args)}")
    service.extend(_environment_lines(unit))
    if unit.restart is RestartPolicy.ALWAYS:
        service.append("Restart=always")
        service.append(f"RestartSec={RESTART_DELAY_SECONDS}")
    else:
        service.append("Restart=no")

    return _sections(
        [
            ("Unit", [f"Description={unit.description}"]),
            ("Service", service),
            ("Install", ["WantedBy=default.target"]),
        ]
    )


def periodic_service_unit(unit: PeriodicTask) -> str:
    """Render the oneshot ``.service`` a periodic task's timer activates."""
    unit_section = [f"Description={unit.description}"]
    if unit.after:
        unit_section.append(f"After={' '.join(unit.after)}")

    service = ["Type=oneshot", f"ExecStart={exec_line(unit.command, unit.args)}"]
    service.extend(_environment_lines(unit))

    return _sections([("Unit", unit_section), ("Service", service)])


def timer_unit(unit: PeriodicTask) -> str:
    """Render the ``.timer`` that triggers a periodic task every interval."""
    return _sections(
        [
            ("Unit", [f"Description={unit.description} timer"]),
            (
                "Timer",
                [
                    f"OnStartupSec={FIRST_RUN_DELAY_SECONDS}s",
                    f"OnUnitActiveSec={unit.interval}s",
                    f"Unit={unit.name}.service",
                ],
            ),
            ("Install", ["WantedBy=timers.target"]),
        ]
    )


def activation_targets(plan: ServicePlan) -> list[str]:
    """Units to enable: persistent services and the timers of periodic tasks."""
    targets = [f"{u.name}.service" for u in plan.services]
    targets.extend(f"{u.name}.timer" for u in plan.periodic_tasks)
    return targets


def render_unit(unit: Unit) -> list[RenderedFile]:
    """Render one unit to its systemd unit files."""
    if isinstance(unit, PersistentService):
        return [RenderedFile(f"{unit.name}.service", service_unit(unit), unit.name)]
    return [
        RenderedFile(f"{unit.name}.service", periodic_service_unit(unit), unit.name),
        RenderedFile(f"{unit.name}.timer", timer_unit(unit), unit.name),
    ]


def render(plan: ServicePlan) -> list[RenderedFile]:
    """Render every unit of a plan as systemd unit files."""
    files: list[RenderedFile] = []
    for unit in plan.units:
        files.extend(render_unit(unit))
    return files


__all__ = [
    "quote_exec_arg",
    "exec_line",
    "service_unit",
    "periodic_service_unit",
    "timer_unit",
    "activation_targets",
    "render_unit",
    "render",
]
