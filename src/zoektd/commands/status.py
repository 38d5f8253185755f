"""zoektd status command - Check service status."""

from __future__ import annotations

import json

import click

from zoektd.cli import ZoektdContext, pass_context


@click.command("status")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_context
def status(ctx: ZoektdContext, as_json: bool) -> None:
    """Check installed units and webserver health.

    \b
    Example:
        zoektd status
        zoektd status --json
    """
    from rich.table import Table

    from zoektd.commands.utils import fail
    from zoektd.errors import ZoektdError
    from zoektd.logging import console
    from zoektd.services.lifecycle import ServiceLifecycle

    try:
        info = ServiceLifecycle(ctx.config).status()
    except ZoektdError as e:
        fail(e, ctx.debug)

    if as_json:
        click.echo(json.dumps(info, indent=2))
        return

    table = Table(title="Zoekt Service Status")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Status", info["status"])
    table.add_row("Platform", info["platform"])
    table.add_row("URL", info["url"])
    table.add_row("Healthy", "Yes" if info["healthy"] else "No")
    for path, present in info["units"].items():
        table.add_row(path, "installed" if present else "missing")
    table.add_row("Indexer wrapper", "installed" if info["wrapper"] else "missing")

    console.print(table)


__all__ = ["status"]
