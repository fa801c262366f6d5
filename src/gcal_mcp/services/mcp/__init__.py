"""MCP stdio transport for the tool catalog."""

from .server import build_mcp_server, run_mcp_server, serve_stdio, to_call_tool_result

__all__ = ["build_mcp_server", "run_mcp_server", "serve_stdio", "to_call_tool_result"]
