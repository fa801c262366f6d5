from __future__ import annotations

import asyncio
import sys
from typing import Any, Dict, List, Optional, TextIO

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from ... import __version__
from ...api import CapabilityRegistry, Dispatcher, ToolInvocation, ToolResult

SERVER_NAME = "google-calendar-mcp-server"
INSTRUCTIONS = (
    "Google Calendar tools: list upcoming events, create events, and obtain the OAuth2 "
    "authorization URL needed before calendar access is granted."
)


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=item.text) for item in result.content],
        isError=result.is_error,
    )


def list_mcp_tools(registry: CapabilityRegistry) -> List[types.Tool]:
    return [
        types.Tool(
            name=capability.name,
            description=capability.description,
            inputSchema=capability.input_schema,
        )
        for capability in registry.list_capabilities()
    ]


def build_mcp_server(dispatcher: Dispatcher) -> Server:
    server: Server = Server(SERVER_NAME, version=__version__, instructions=INSTRUCTIONS)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return list_mcp_tools(dispatcher.registry)

    # Arguments are validated by the dispatcher, not by the MCP library.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> types.CallToolResult:
        result = await dispatcher.handle(ToolInvocation(name=name, arguments=arguments or {}))
        return to_call_tool_result(result)

    return server


def announce_startup(stream: Optional[TextIO] = None) -> None:
    # stdout carries the protocol; the startup line goes to stderr whatever the log level.
    print("Google Calendar MCP server running on stdio", file=stream or sys.stderr, flush=True)


async def serve_stdio(dispatcher: Dispatcher) -> None:
    server = build_mcp_server(dispatcher)
    async with stdio_server() as (read_stream, write_stream):
        announce_startup()
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run_mcp_server(dispatcher: Dispatcher) -> None:
    asyncio.run(serve_stdio(dispatcher))
