"""MCP Server - exposes a tool registry over the protocol surface.

The server owns no session state. It answers discovery requests with the
schemas in its registry and turns every tool call into a ToolResult:
unknown tools and handler faults become failed results instead of
exceptions, so one misbehaving tool cannot take the server down.
"""

import asyncio
import contextvars
import functools
import inspect
import time
from typing import Any, Iterable, Optional

from shared.config import get_settings
from shared.logging import call_context, get_logger
from shared.models import (
    ServerInfo,
    ToolCall,
    ToolImplementation,
    ToolResult,
    ToolSchema,
)
from mcp_server.registry import ToolNotFoundError, ToolRegistry

logger = get_logger(__name__)


def _error_message(exc: Exception) -> str:
    """Message of a handler fault. A single string argument is used as is."""
    if len(exc.args) == 1 and isinstance(exc.args[0], str):
        message = exc.args[0]
    else:
        try:
            message = str(exc)
        except Exception:
            message = type(exc).__name__
    return message or "Unknown error"


class MCPServer:
    """
    Server wrapping a frozen tool registry.

    Args:
        name: Server name
        version: Server version (defaults to the configured default version)
        tools: Tool implementations to register

    Raises:
        DuplicateToolError: If two tools share a name
    """

    def __init__(
        self,
        name: str,
        version: Optional[str] = None,
        tools: Iterable[ToolImplementation] = (),
        log_tracebacks: Optional[bool] = None
    ) -> None:
        settings = get_settings().server
        self._info = ServerInfo(name=name, version=version or settings.default_version)
        self._log_tracebacks = (
            settings.log_tracebacks if log_tracebacks is None else log_tracebacks
        )

        self.registry = ToolRegistry(tools)
        self.registry.freeze()

        logger.info(
            "Server created",
            server=self._info.name,
            version=self._info.version,
            tool_count=len(self.registry)
        )

    @property
    def info(self) -> ServerInfo:
        """Server metadata."""
        return self._info

    async def list_tools(self) -> list[ToolSchema]:
        """List tool schemas in registration order."""
        return self.registry.list_tools()

    async def execute_tool(self, call: ToolCall) -> ToolResult:
        """
        Execute a tool call.

        Never raises for tool outcomes: an unknown tool name or a handler
        fault is reported through a failed ToolResult.

        Args:
            call: Tool call request

        Returns:
            Tool execution result echoing the call id
        """
        with call_context(call.id, call.name, self._info.name):
            return await self._execute(call)

    async def _execute(self, call: ToolCall) -> ToolResult:
        start_time = time.perf_counter()

        try:
            tool = self.registry.lookup(call.name)
        except ToolNotFoundError as e:
            logger.warning("Tool not found")
            return ToolResult.fail(call.id, str(e))

        try:
            output = await self._invoke(tool, call.arguments)
            result = ToolResult.ok(call.id, output)
        except Exception as e:
            message = _error_message(e)
            logger.error("Tool execution failed", error=message, exc_info=self._log_tracebacks)
            result = ToolResult.fail(call.id, message)

        result.execution_time_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            "Tool executed",
            success=result.success,
            execution_time_ms=round(result.execution_time_ms, 3)
        )

        return result

    async def _invoke(self, tool: ToolImplementation, arguments: dict[str, Any]) -> Any:
        """Run a handler; sync handlers run in the default executor."""
        handler = tool.handler

        if inspect.iscoroutinefunction(handler):
            return await handler(arguments)

        loop = asyncio.get_running_loop()
        context = contextvars.copy_context()
        output = await loop.run_in_executor(
            None, functools.partial(context.run, handler, arguments)
        )

        if inspect.isawaitable(output):
            output = await output

        return output

    def __repr__(self) -> str:
        return f"MCPServer(name={self._info.name!r}, version={self._info.version!r})"
