from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ... import __version__
from ...api import Dispatcher, ToolInvocation

logger = logging.getLogger(__name__)


class ToolCallRequest(BaseModel):
    # Shape is checked by the dispatcher so a bad value comes back as a tool error.
    arguments: Any = Field(default_factory=dict)


def build_app(dispatcher: Dispatcher) -> FastAPI:
    """HTTP mirror of the MCP surface; tool failures are 200 responses with ``isError``."""

    app = FastAPI(title="Google Calendar Tools", version=__version__)

    @app.get("/tools")
    async def list_tools() -> JSONResponse:
        tools = [capability.as_tool() for capability in dispatcher.registry.list_capabilities()]
        return JSONResponse({"tools": tools})

    @app.post("/tools/{tool_name}")
    async def call_tool(tool_name: str, request: ToolCallRequest) -> JSONResponse:
        result = await dispatcher.handle(ToolInvocation(name=tool_name, arguments=request.arguments))
        logger.debug("HTTP tool call %s finished (error=%s)", tool_name, result.is_error)
        return JSONResponse(result.to_wire())

    return app


def run_local_server(dispatcher: Dispatcher, host: str = "127.0.0.1", port: int = 8000) -> None:
    import asyncio
    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    config = Config()
    config.bind = [f"{host}:{port}"]
    logger.info("Google Calendar tools listening on http://%s:%d", host, port)
    asyncio.run(serve(build_app(dispatcher), config))
