"""zoektd check command - Validate configuration."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from zoektd.cli import ZoektdContext, pass_context

if TYPE_CHECKING:
    from zoektd.config import ZoektdConfig


def config_warnings(config: ZoektdConfig) -> list[str]:
    """Problems that do not block generation but are probably mistakes."""
    warnings: list[str] = []
    daemon = config.daemon
    if daemon.enabled and not daemon.repos:
        warnings.append("daemon.enabled is true but daemon.repos is empty; no services will be installed")
    if config.mcp.enabled and not daemon.webserver.rpc:
        warnings.append("mcp.enabled requires daemon.webserver.rpc = true; zoekt-mcp cannot query without it")
    if daemon.ctags.enabled and daemon.ctags.require and daemon.ctags.package is not None:
        ctags = daemon.ctags.package / "bin" / "ctags"
        if not ctags.exists():
            warnings.append(f"ctags is required but {ctags} does not exist; indexing will fail")
    return warnings


@click.command("check")
@click.option("--json", "as_json", is_flag=True, help="Output resolved configuration as JSON")
@pass_context
def check(ctx: ZoektdContext, as_json: bool) -> None:
    """Validate configuration and show resolved settings.

    \b
    Examples:
        zoektd check
        zoektd --config ./zoektd.toml check --json
    """
    from rich.table import Table

    from zoektd.commands.utils import fail
    from zoektd.errors import ZoektdError
    from zoektd.logging import console, print_success, print_warning

    try:
        config = ctx.config
    except ZoektdError as e:
        fail(e, ctx.debug)

    if as_json:
        click.echo(json.dumps(config.model_dump(mode="json"), indent=2))
        return

    daemon = config.daemon
    table = Table(title="zoektd Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Platform", config.resolved_platform)
    table.add_row("Daemon", "enabled" if daemon.enabled else "disabled")
    table.add_row("Repositories", "\n".join(daemon.repos) or "(none)")
    table.add_row("Index directory", str(daemon.index_dir))
    table.add_row("Port", str(daemon.port))
    table.add_row("Index interval", f"{daemon.index_interval}s")
    table.add_row("Zoekt prefix", str(daemon.package))
    table.add_row("Log directory", str(daemon.webserver.log_dir))
    table.add_row("MCP entry", "enabled" if config.mcp.enabled else "disabled")
    console.print(table)

    for warning in config_warnings(config):
        print_warning(warning)
    print_success("Configuration is valid")


__all__ = ["check", "config_warnings"]
