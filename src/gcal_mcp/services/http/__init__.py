"""HTTP transport for the tool catalog."""

from .server import ToolCallRequest, build_app, run_local_server

__all__ = ["ToolCallRequest", "build_app", "run_local_server"]
