from __future__ import annotations

import asyncio
import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..services import ServiceContext
from .registry import Capability, CapabilityNotFoundError, CapabilityRegistry, get_registry
from .results import FailureKind, HandlerOutcome, ToolFailure, ToolResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolInvocation:
    name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)


class Dispatcher:
    """Routes tool invocations to handlers and folds every failure into a ToolResult.

    ``handle`` never raises for ordinary errors: unknown tools, invalid
    arguments, authentication problems and Calendar API failures all come back
    as results with ``is_error`` set. Handlers run in a worker thread because the
    Google client is synchronous; one handler runs at a time since they share
    the cached client and access token.
    """

    def __init__(
        self,
        context: ServiceContext,
        *,
        registry: Optional[CapabilityRegistry] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.context = context
        self.registry = registry if registry is not None else get_registry()
        self.timeout = timeout
        self._lock = asyncio.Lock()

    async def handle(self, invocation: ToolInvocation) -> ToolResult:
        try:
            capability = self.registry.resolve(invocation.name)
        except CapabilityNotFoundError as exc:
            return self._fail(invocation.name, ToolFailure.protocol(str(exc)))

        arguments = capability.bind(invocation.arguments)
        if isinstance(arguments, ToolFailure):
            return self._fail(invocation.name, arguments)

        async with self._lock:
            outcome = await self._invoke(capability, arguments)
        if isinstance(outcome, ToolFailure):
            return self._fail(invocation.name, outcome)
        logger.debug("Tool %s completed", invocation.name)
        return outcome

    async def _invoke(self, capability: Capability, arguments: Mapping[str, Any]) -> HandlerOutcome:
        call = functools.partial(capability.handler, self.context, **arguments)
        try:
            if self.timeout is None:
                outcome = await asyncio.to_thread(call)
            else:
                outcome = await asyncio.wait_for(asyncio.to_thread(call), timeout=self.timeout)
        except asyncio.TimeoutError:
            return ToolFailure(
                FailureKind.DOWNSTREAM,
                f"Tool '{capability.name}' timed out after {self.timeout:g} seconds",
            )
        except Exception as exc:  # noqa: BLE001
            logger.debug("Tool %s raised", capability.name, exc_info=True)
            return ToolFailure.from_exception(exc)
        if not isinstance(outcome, (ToolResult, ToolFailure)):
            return ToolFailure(
                FailureKind.DOWNSTREAM,
                f"Tool '{capability.name}' returned an unsupported result: {type(outcome).__name__}",
            )
        return outcome

    def _fail(self, name: str, failure: ToolFailure) -> ToolResult:
        level = logging.DEBUG if failure.kind is FailureKind.PROTOCOL else logging.WARNING
        logger.log(level, "Tool %s failed (%s): %s", name, failure.kind.value, failure.message)
        return failure.to_result()
