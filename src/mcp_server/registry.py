"""Tool Registry for the MCP Server.

Holds the authoritative name -> (schema, handler) mapping a server offers.
Tools are registered while the server is being built; the server then
freezes its registry so the catalog never changes afterwards.
"""

from typing import Iterable, Optional

from shared.logging import get_logger
from shared.models import ToolImplementation, ToolSchema

logger = get_logger(__name__)


class RegistryError(Exception):
    """Base exception for registry errors."""
    pass


class DuplicateToolError(RegistryError):
    """A tool with the same name is already registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool '{name}' is already registered")


class ToolNotFoundError(RegistryError, KeyError):
    """No tool with the given name is registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool '{name}' not found")

    def __str__(self) -> str:
        return self.args[0]


class RegistryFrozenError(RegistryError):
    """The registry no longer accepts registrations."""
    pass


class ToolRegistry:
    """
    Registry of the tools exposed by one server.

    Responsibilities:
    - Register tools, rejecting duplicate names
    - List schemas in registration order
    - Look up tools by name
    """

    def __init__(self, tools: Optional[Iterable[ToolImplementation]] = None) -> None:
        self._tools: dict[str, ToolImplementation] = {}
        self._frozen = False

        if tools is not None:
            self.register_many(tools)

    def register(self, tool: ToolImplementation) -> None:
        """
        Register a tool in the registry.

        Args:
            tool: Tool schema and handler to register

        Raises:
            DuplicateToolError: If the tool name is already registered
            RegistryFrozenError: If the registry has been frozen
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register '{tool.name}': registry is frozen"
            )

        if tool.name in self._tools:
            raise DuplicateToolError(tool.name)

        self._tools[tool.name] = tool

        logger.debug("Tool registered", tool=tool.name)

    def register_many(self, tools: Iterable[ToolImplementation]) -> None:
        """Register multiple tools at once."""
        for tool in tools:
            self.register(tool)

    def freeze(self) -> None:
        """Stop accepting registrations."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, name: str) -> ToolImplementation:
        """
        Get a tool by name.

        Raises:
            ToolNotFoundError: If no tool with that name is registered
        """
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        return tool

    def get(self, name: str) -> Optional[ToolImplementation]:
        """Get a tool by name, or None if it is not registered."""
        return self._tools.get(name)

    def list_tools(self) -> list[ToolSchema]:
        """List all tool schemas in registration order."""
        return [tool.tool_schema for tool in self._tools.values()]

    def names(self) -> list[str]:
        """List all tool names in registration order."""
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
