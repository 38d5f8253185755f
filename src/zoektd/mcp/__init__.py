"""MCP discovery entry for the zoekt-mcp query server."""

from zoektd.mcp.entry import (
    ENDPOINT_ENV_VAR,
    McpConfig,
    ServerEntry,
    build_server_entry,
    mcp_servers_document,
)

__all__ = [
    "ENDPOINT_ENV_VAR",
    "McpConfig",
    "ServerEntry",
    "build_server_entry",
    "mcp_servers_document",
]
