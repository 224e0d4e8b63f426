"""MCP Client - Tool discovery and execution.

The MCP Client connects to one server at a time, caches the tools it
discovers and executes tool calls against the active server.
"""

from mcp_client.client import (
    AlreadyConnectedError,
    MCPClient,
    MCPClientError,
    NotConnectedError,
    ToolServer,
)
from mcp_client.discovery import ToolDiscovery

__all__ = [
    "AlreadyConnectedError",
    "MCPClient",
    "MCPClientError",
    "NotConnectedError",
    "ToolDiscovery",
    "ToolServer",
]
