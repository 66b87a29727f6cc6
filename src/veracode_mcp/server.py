"""MCP stdio server exposing the tool catalogue."""

from __future__ import annotations

import json
import logging
from typing import Any

import mcp.server.stdio
import mcp.types as types
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions

from veracode_mcp.api import VeracodeClient
from veracode_mcp.tools import ToolContext, dispatch_tool, get_all_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "veracode-mcp"


def package_version() -> str:
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("veracode-mcp")
    except PackageNotFoundError:
        return "0.0.0+unknown"


def to_mcp_tool(definition: dict[str, Any]) -> types.Tool:
    return types.Tool(
        name=definition["name"],
        description=definition["description"],
        inputSchema=definition["input_schema"],
    )


class VeracodeMCPServer:
    """MCP server bound to one client for the whole process lifetime."""

    def __init__(self, client: VeracodeClient):
        self.client = client
        self.context = ToolContext.from_client(client)
        self.server = Server(SERVER_NAME)
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        @self.server.list_tools()
        async def handle_list_tools() -> list[types.Tool]:
            return [to_mcp_tool(d) for d in get_all_tools()]

        @self.server.call_tool()
        async def handle_call_tool(name: str, arguments: dict | None) -> list[types.TextContent]:
            return await self.call_tool(name, arguments)

    async def call_tool(self, name: str, arguments: dict | None) -> list[types.TextContent]:
        """Dispatch one tool call and wrap the envelope as MCP text content."""
        logger.debug("Tool call %s", name)
        envelope = await dispatch_tool(name, arguments or {}, self.context)
        return [types.TextContent(type="text", text=json.dumps(envelope, indent=2, default=str))]

    async def run(self) -> None:
        """Serve over stdio until the client disconnects."""
        async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=SERVER_NAME,
                    server_version=package_version(),
                    capabilities=self.server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                ),
            )


async def serve(client: VeracodeClient) -> None:
    """Open the client, run the server, and close the client on exit."""
    async with client:
        logger.info("Starting %s with %d tools", SERVER_NAME, len(get_all_tools()))
        await VeracodeMCPServer(client).run()
