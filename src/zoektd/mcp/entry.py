"""MCP server entry for zoekt-mcp.

zoekt-mcp translates MCP tool calls into queries against the webserver's
JSON API. It is started by the MCP host, not by zoektd; this module only
declares how to start it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from zoektd.paths import MCP_EXECUTABLE, bin_dir

# Environment variable zoekt-mcp reads the webserver URL from
ENDPOINT_ENV_VAR = "ZOEKT_URL"

DEFAULT_SERVER_NAME = "zoekt"


class McpConfig(BaseModel):
    """zoekt-mcp server entry settings."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(
        default=False,
        description="Publish an MCP server entry for zoekt-mcp",
    )
    package: Path | None = Field(
        default=None,
        description="Install prefix providing zoekt-mcp",
    )
    env: dict[str, str] = Field(
        default_factory=dict,
        description="Extra environment for zoekt-mcp (ZOEKT_URL always wins)",
    )


@dataclass(frozen=True)
class ServerEntry:
    """How an MCP host starts zoekt-mcp."""

    command: str
    args: tuple[str, ...] = ()
    env: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"command": self.command, "args": list(self.args), "env": dict(self.env)}


def endpoint_url(port: int) -> str:
    """Get the local webserver URL for a port."""
    return f"http://localhost:{port}"


def build_server_entry(mcp: McpConfig, port: int) -> ServerEntry | None:
    """Build the zoekt-mcp server entry.

    The entry is static: it does not check whether the webserver is
    running, and the webserver needs ``rpc`` enabled for it to be useful.

    Args:
        mcp: MCP entry configuration (package must be resolved)
        port: Webserver listen port

    Returns:
        ServerEntry, or None when the entry is disabled
    """
    if not mcp.enabled:
        return None

    if mcp.package is None:
        command = MCP_EXECUTABLE
    else:
        command = str(bin_dir(mcp.package) / MCP_EXECUTABLE)

    env = {**mcp.env, ENDPOINT_ENV_VAR: endpoint_url(port)}
    return ServerEntry(command=command, env=env)


def mcp_servers_document(entry: ServerEntry, name: str = DEFAULT_SERVER_NAME) -> dict[str, Any]:
    """Wrap an entry in the ``mcpServers`` document MCP hosts read."""
    return {"mcpServers": {name: entry.to_dict()}}


__all__ = [
    "ENDPOINT_ENV_VAR",
    "DEFAULT_SERVER_NAME",
    "McpConfig",
    "ServerEntry",
    "endpoint_url",
    "build_server_entry",
    "mcp_servers_document",
]
