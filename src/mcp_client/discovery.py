"""Tool Discovery for MCP Client.

Lookup and search over the tool list a client cached at connect time.
The server is never re-queried.
"""

from typing import Optional

from shared.logging import get_logger
from shared.models import ToolSchema
from mcp_client.client import MCPClient

logger = get_logger(__name__)


class ToolDiscovery:
    """
    Views over a client's discovered tools.

    Provides:
    - Lookup by name
    - Search by name or description
    - Required argument names per tool
    """

    def __init__(self, client: MCPClient) -> None:
        self.client = client

    async def get_all_tools(self) -> list[ToolSchema]:
        """Get all tools of the active server."""
        return await self.client.discover_tools()

    async def get_tool_by_name(self, name: str) -> Optional[ToolSchema]:
        """
        Get a specific tool by name.

        Args:
            name: Tool name

        Returns:
            Tool schema or None if the active server does not offer it

        Raises:
            NotConnectedError: If the client is disconnected
        """
        for tool in await self.client.discover_tools():
            if tool.name == name:
                return tool
        return None

    async def search_tools(self, query: str) -> list[ToolSchema]:
        """
        Search tools by name or description.

        Args:
            query: Search query (case-insensitive)

        Returns:
            List of matching tool schemas
        """
        query_lower = query.lower()
        results = [
            tool for tool in await self.client.discover_tools()
            if query_lower in tool.name.lower() or query_lower in tool.description.lower()
        ]

        logger.debug("Tool search", query=query, matches=len(results))
        return results

    async def required_arguments(self, name: str) -> Optional[list[str]]:
        """Get required argument names for a tool, or None if it is not offered."""
        tool = await self.get_tool_by_name(name)
        if tool is None:
            return None
        return list(tool.input_schema.required)
