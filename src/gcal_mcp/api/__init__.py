"""Tool catalog and dispatch surface shared by the MCP and HTTP servers."""

from __future__ import annotations

from .dispatch import Dispatcher, ToolInvocation
from .registry import (
    Capability,
    CapabilityNotFoundError,
    CapabilityRegistry,
    FieldSpec,
    get_registry,
    register_tool,
)
from .results import FailureKind, ToolFailure, ToolResult

# Import endpoints so decorators run at module import time.
from . import endpoints  # noqa: F401

__all__ = [
    "Capability",
    "CapabilityNotFoundError",
    "CapabilityRegistry",
    "Dispatcher",
    "FailureKind",
    "FieldSpec",
    "ToolFailure",
    "ToolInvocation",
    "ToolResult",
    "get_registry",
    "register_tool",
]
