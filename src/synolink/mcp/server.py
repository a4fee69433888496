"""MCP server — publishes the FileStation tool catalog over stdio.

A low-level ``mcp`` server with two handlers:
- ``tools/list`` returns the registry catalog
- ``tools/call`` runs a tool through the registry and maps the
  ToolResult onto a CallToolResult (one text block, ``isError`` set on failure)

Argument validation is left to the registry so that diagnostics come from
the tool argument models rather than the SDK.

Created: 2026-10-12
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from synolink import SERVER_NAME, SERVER_VERSION
from synolink.config import Settings
from synolink.integrations.filestation import FileStationClient
from synolink.tools.builtin import create_filestation_registry
from synolink.tools.protocol import ToolResult
from synolink.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=result.text)],
        isError=result.is_error,
    )


def build_server(registry: ToolRegistry) -> Server:
    """Create the MCP server bound to ``registry``."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [types.Tool(**definition) for definition in registry.get_definitions()]

    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
        result = await registry.execute(name, arguments)
        return to_call_tool_result(result)

    return server


def announce_startup(settings: Settings) -> None:
    """Print the startup lines to stderr regardless of the configured log level.

    stdout belongs to the protocol stream.
    """
    print("SynoLink MCP server running on stdio", file=sys.stderr)
    print(f"Synology server: {settings.host}:{settings.port}", file=sys.stderr)


async def serve(settings: Settings, client: FileStationClient | None = None) -> None:
    """Run the server on stdin/stdout until the host closes the stream.

    A session still open at shutdown is logged out on a best-effort basis.
    """
    if client is None:
        client = FileStationClient.from_settings(settings)
    server = build_server(create_filestation_registry(client))

    try:
        async with stdio_server() as (read_stream, write_stream):
            announce_startup(settings)
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        if client.is_authenticated:
            logger.info("Closing the NAS session before shutdown")
            await client.logout()
