"""Base class for example tool sets.

A tool set:
- Owns its backing state explicitly (no module-level databases)
- Serializes access to that state with its own lock
- Validates arguments against each tool's input schema before running it
- Never talks to other tool sets
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional

from shared.logging import get_logger
from shared.models import ToolImplementation, ToolSchema
from shared.schema import apply_defaults, create_tool_schema, validate_arguments
from mcp_server.server import MCPServer

logger = get_logger(__name__)


AsyncHandler = Callable[[dict[str, Any]], Awaitable[Any]]


class ToolSet(ABC):
    """
    Base class for a group of tools sharing one piece of state.

    Subclasses declare their tools in ``_define_tools`` via ``_define``.
    Handlers receive validated arguments with schema defaults applied and
    must hold ``self._lock`` while touching shared state, since a server
    may execute calls concurrently.
    """

    domain: str = "default"

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._tools: dict[str, ToolImplementation] = {}
        self._define_tools()

    @abstractmethod
    def _define_tools(self) -> None:
        """Declare all tools of this set."""
        pass

    @property
    def tools(self) -> list[ToolImplementation]:
        """Return all tool implementations in declaration order."""
        return list(self._tools.values())

    def _define(
        self,
        name: str,
        description: str,
        parameters: list[dict[str, Any]],
        handler: AsyncHandler
    ) -> None:
        """
        Declare a tool.

        Args:
            name: Tool name
            description: Human-readable description
            parameters: Parameter definitions for ``create_tool_schema``
            handler: Coroutine taking the validated arguments
        """
        schema = ToolSchema(
            name=name,
            description=description,
            input_schema=create_tool_schema(parameters)
        )

        async def run(arguments: dict[str, Any]) -> Any:
            validate_arguments(name, arguments, schema.input_schema)
            logger.debug("Tool action", domain=self.domain)
            return await handler(apply_defaults(arguments, schema.input_schema))

        self._tools[name] = ToolImplementation(tool_schema=schema, handler=run)

    def create_server(self, name: str, version: Optional[str] = None) -> MCPServer:
        """Build a server exposing this tool set."""
        return MCPServer(name=name, version=version, tools=self.tools)
