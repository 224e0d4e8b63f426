"""MCP Server - Tool registry and execution.

The server is the sole fault-containment point of the protocol: it
registers tools at construction, answers discovery requests and
normalizes every execution outcome into a ToolResult.
"""

from mcp_server.registry import (
    DuplicateToolError,
    RegistryError,
    RegistryFrozenError,
    ToolNotFoundError,
    ToolRegistry,
)
from mcp_server.server import MCPServer

__all__ = [
    "DuplicateToolError",
    "MCPServer",
    "RegistryError",
    "RegistryFrozenError",
    "ToolNotFoundError",
    "ToolRegistry",
]
