"""MCP Client for tool discovery and execution.

The client holds at most one active connection. Connecting performs the
discovery handshake and caches the server's tool list; calls are issued
one at a time and correlated by a client-generated id.
"""

import time
import uuid
from typing import Any, Optional, Protocol, runtime_checkable

from shared.config import get_settings
from shared.logging import get_logger
from shared.models import ConnectionState, ServerInfo, ToolCall, ToolResult, ToolSchema

logger = get_logger(__name__)


class MCPClientError(Exception):
    """Base exception for MCP Client errors."""
    pass


class NotConnectedError(MCPClientError):
    """Operation requires an active connection."""

    def __init__(self, message: str = "Not connected to any server") -> None:
        super().__init__(message)


class AlreadyConnectedError(MCPClientError):
    """A strict client was asked to connect while already connected."""
    pass


@runtime_checkable
class ToolServer(Protocol):
    """The in-process call contract a server must satisfy."""

    @property
    def info(self) -> ServerInfo:
        ...

    async def list_tools(self) -> list[ToolSchema]:
        ...

    async def execute_tool(self, call: ToolCall) -> ToolResult:
        ...


class MCPClient:
    """
    Client for interacting with one MCP server at a time.

    Provides methods for:
    - Connecting to and disconnecting from a server
    - Discovering the tools the active server offers
    - Executing tool calls

    Tool outcomes are reported in-band through ToolResult; only misuse of
    the connection state raises.
    """

    def __init__(
        self,
        strict: Optional[bool] = None,
        call_id_prefix: Optional[str] = None
    ) -> None:
        """
        Initialize MCP Client.

        Args:
            strict: Raise AlreadyConnectedError on connect() while connected
                instead of replacing the active connection
            call_id_prefix: Prefix of generated call ids
        """
        settings = get_settings().client
        self.strict = settings.strict_reconnect if strict is None else strict
        self.call_id_prefix = call_id_prefix or settings.call_id_prefix

        self._server: Optional[ToolServer] = None
        self._tools: list[ToolSchema] = []

    @property
    def state(self) -> ConnectionState:
        """Current connection state."""
        if self._server is None:
            return ConnectionState.DISCONNECTED
        return ConnectionState.CONNECTED

    @property
    def is_connected(self) -> bool:
        return self._server is not None

    @property
    def server_info(self) -> Optional[ServerInfo]:
        """Info of the active server, or None when disconnected."""
        if self._server is None:
            return None
        return self._server.info

    async def __aenter__(self) -> "MCPClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.disconnect()

    async def connect(self, server: ToolServer) -> None:
        """
        Connect to a server and cache its tool list.

        Connecting while already connected replaces the active connection
        without notifying the previous server, unless the client is strict.

        Args:
            server: Server to connect to

        Raises:
            AlreadyConnectedError: If strict and already connected
        """
        if self._server is not None:
            if self.strict:
                raise AlreadyConnectedError(
                    f"Already connected to '{self._server.info.name}'; disconnect first"
                )
            logger.warning(
                "Replacing active connection",
                previous=self._server.info.name,
                server=server.info.name
            )

        logger.info("Connecting to server", server=server.info.name)

        tools = list(await server.list_tools())

        self._server = server
        self._tools = tools

        logger.info(
            "Connected",
            server=server.info.name,
            version=server.info.version,
            tool_count=len(tools)
        )

    async def disconnect(self) -> None:
        """Drop the active connection. A no-op when disconnected."""
        if self._server is None:
            return

        logger.info("Disconnecting from server", server=self._server.info.name)
        self._server = None
        self._tools = []

    async def discover_tools(self) -> list[ToolSchema]:
        """
        Return the tool list cached at connect time.

        Raises:
            NotConnectedError: If disconnected
        """
        self._require_connection()
        return list(self._tools)

    async def call_tool(
        self,
        name: str,
        arguments: Optional[dict[str, Any]] = None
    ) -> ToolResult:
        """
        Execute a tool on the active server.

        Args:
            name: Tool name
            arguments: Tool arguments

        Returns:
            Tool execution result, unchanged

        Raises:
            NotConnectedError: If disconnected
        """
        server = self._require_connection()

        call = ToolCall(
            id=self._new_call_id(),
            name=name,
            arguments=arguments or {}
        )

        logger.debug("Calling tool", tool=name, call_id=call.id, server=server.info.name)

        result = await server.execute_tool(call)

        if result.success:
            logger.debug("Tool succeeded", tool=name, call_id=call.id)
        else:
            logger.info("Tool failed", tool=name, call_id=call.id, error=result.error)

        return result

    def _require_connection(self) -> ToolServer:
        if self._server is None:
            raise NotConnectedError()
        return self._server

    def _new_call_id(self) -> str:
        return f"{self.call_id_prefix}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:12]}"
