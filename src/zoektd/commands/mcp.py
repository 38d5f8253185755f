"""zoektd mcp-entry command - Print the zoekt-mcp server entry."""

from __future__ import annotations

import json

import click

from zoektd.cli import ZoektdContext, pass_context
from zoektd.mcp.entry import DEFAULT_SERVER_NAME


@click.command("mcp-entry")
@click.option("--name", default=DEFAULT_SERVER_NAME, show_default=True, help="Server name")
@click.option("--bare", is_flag=True, help="Print only the entry, without the mcpServers wrapper")
@pass_context
def mcp_entry(ctx: ZoektdContext, name: str, bare: bool) -> None:
    """Print the MCP server entry for zoekt-mcp as JSON.

    The entry points zoekt-mcp at the local webserver through ZOEKT_URL.
    Prints nothing when mcp.enabled is false.

    \b
    Examples:
        zoektd mcp-entry
        zoektd mcp-entry --bare
    """
    from zoektd.commands.utils import fail
    from zoektd.errors import ZoektdError
    from zoektd.logging import print_info, print_warning
    from zoektd.mcp.entry import build_server_entry, mcp_servers_document

    try:
        config = ctx.config
    except ZoektdError as e:
        fail(e, ctx.debug)

    entry = build_server_entry(config.mcp, config.daemon.port)
    if entry is None:
        print_info("MCP entry disabled (set mcp.enabled = true)")
        return
    if not config.daemon.webserver.rpc:
        print_warning("daemon.webserver.rpc is false; zoekt-mcp needs the RPC interface")

    document = entry.to_dict() if bare else mcp_servers_document(entry, name)
    click.echo(json.dumps(document, indent=2))


__all__ = ["mcp_entry"]
