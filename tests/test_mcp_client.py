"""Tests for MCP Client components."""

import pytest

from shared.models import ConnectionState, ToolImplementation, ToolSchema
from shared.schema import create_tool_schema
from mcp_server.server import MCPServer


async def echo(args):
    return {"value": args.get("value")}


def make_server(name="Echo-Server", tool_names=("echo",)):
    tools = [
        ToolImplementation(
            tool_schema=ToolSchema(
                name=tool_name,
                description=f"{tool_name} tool",
                input_schema=create_tool_schema(
                    [{"name": "value", "type": "number", "description": "Value to echo"}]
                )
            ),
            handler=echo
        )
        for tool_name in tool_names
    ]
    return MCPServer(name=name, version="1.0.0", tools=tools)


class RecordingServer:
    """Server double that records what reaches it."""

    def __init__(self, inner):
        self.inner = inner
        self.list_calls = 0
        self.calls = []

    @property
    def info(self):
        return self.inner.info

    async def list_tools(self):
        self.list_calls += 1
        return await self.inner.list_tools()

    async def execute_tool(self, call):
        self.calls.append(call)
        return await self.inner.execute_tool(call)


class TestMCPClient:
    """Tests for the MCPClient state machine."""

    def test_starts_disconnected(self):
        """Test initial state."""
        from mcp_client.client import MCPClient

        client = MCPClient()

        assert client.state == ConnectionState.DISCONNECTED
        assert client.is_connected is False
        assert client.server_info is None

    @pytest.mark.asyncio
    async def test_operations_require_connection(self):
        """Test that discovery and calls raise while disconnected."""
        from mcp_client.client import MCPClient, NotConnectedError

        client = MCPClient()

        with pytest.raises(NotConnectedError, match="Not connected"):
            await client.discover_tools()

        with pytest.raises(NotConnectedError):
            await client.call_tool("echo", {"value": 1})

    @pytest.mark.asyncio
    async def test_connect_caches_tools(self):
        """Test that discovery returns the tool list captured at connect time."""
        from mcp_client.client import MCPClient

        server = RecordingServer(make_server(tool_names=("echo", "echo2")))
        client = MCPClient()

        await client.connect(server)

        assert client.state == ConnectionState.CONNECTED
        assert client.server_info.name == "Echo-Server"
        assert await client.discover_tools() == await server.inner.list_tools()
        await client.discover_tools()
        assert server.list_calls == 1

    @pytest.mark.asyncio
    async def test_discovered_list_is_a_copy(self):
        """Test that mutating the returned list does not touch the cache."""
        from mcp_client.client import MCPClient

        client = MCPClient()
        await client.connect(make_server())

        tools = await client.discover_tools()
        tools.clear()

        assert len(await client.discover_tools()) == 1

    @pytest.mark.asyncio
    async def test_echo_scenario(self):
        """Test calling echo returns the correlated success result."""
        from mcp_client.client import MCPClient

        server = RecordingServer(make_server())
        client = MCPClient()
        await client.connect(server)

        result = await client.call_tool("echo", {"value": 7})

        assert result.success is True
        assert result.result == {"value": 7}
        assert result.id == server.calls[0].id
        assert server.calls[0].arguments == {"value": 7}

    @pytest.mark.asyncio
    async def test_missing_tool_scenario(self):
        """Test that an unknown tool comes back as a failed result, not an exception."""
        from mcp_client.client import MCPClient

        client = MCPClient()
        await client.connect(make_server())

        result = await client.call_tool("missing_tool", {})

        assert result.success is False
        assert result.error == "Tool 'missing_tool' not found"

    @pytest.mark.asyncio
    async def test_disconnect_then_call_raises(self):
        """Test that calls after disconnect raise NotConnectedError."""
        from mcp_client.client import MCPClient, NotConnectedError

        client = MCPClient()
        await client.connect(make_server())
        await client.disconnect()

        assert client.state == ConnectionState.DISCONNECTED
        with pytest.raises(NotConnectedError):
            await client.call_tool("echo", {"value": 7})
        with pytest.raises(NotConnectedError):
            await client.discover_tools()

    @pytest.mark.asyncio
    async def test_disconnect_when_disconnected_is_noop(self):
        """Test that disconnecting twice is harmless."""
        from mcp_client.client import MCPClient

        client = MCPClient()

        await client.disconnect()
        await client.disconnect()

        assert client.state == ConnectionState.DISCONNECTED

    @pytest.mark.asyncio
    async def test_call_ids_are_unique(self):
        """Test that each call gets a fresh id with the configured prefix."""
        from mcp_client.client import MCPClient

        server = RecordingServer(make_server())
        client = MCPClient(call_id_prefix="req")
        await client.connect(server)

        for i in range(20):
            await client.call_tool("echo", {"value": i})

        ids = [c.id for c in server.calls]
        assert len(set(ids)) == 20
        assert all(i.startswith("req_") for i in ids)

    @pytest.mark.asyncio
    async def test_results_in_call_order(self):
        """Test that sequential calls resolve in issue order."""
        from mcp_client.client import MCPClient

        client = MCPClient()
        await client.connect(make_server())

        results = [await client.call_tool("echo", {"value": i}) for i in range(5)]

        assert [r.result["value"] for r in results] == [0, 1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_reconnect_replaces_connection(self):
        """Test that a permissive client replaces the active server on connect."""
        from mcp_client.client import MCPClient

        first = RecordingServer(make_server("First", ("a",)))
        second = RecordingServer(make_server("Second", ("b",)))
        client = MCPClient(strict=False)

        await client.connect(first)
        await client.connect(second)

        assert client.server_info.name == "Second"
        assert [t.name for t in await client.discover_tools()] == ["b"]

        await client.call_tool("b", {"value": 1})
        assert first.calls == []
        assert len(second.calls) == 1

    @pytest.mark.asyncio
    async def test_strict_reconnect_raises(self):
        """Test that a strict client requires disconnect before connecting again."""
        from mcp_client.client import AlreadyConnectedError, MCPClient

        client = MCPClient(strict=True)
        await client.connect(make_server("First"))

        with pytest.raises(AlreadyConnectedError, match="First"):
            await client.connect(make_server("Second"))

        assert client.server_info.name == "First"

        await client.disconnect()
        await client.connect(make_server("Second"))
        assert client.server_info.name == "Second"

    @pytest.mark.asyncio
    async def test_failed_discovery_keeps_previous_state(self):
        """Test that a connect whose discovery fails leaves the client unchanged."""
        from mcp_client.client import MCPClient

        class BrokenServer(RecordingServer):
            async def list_tools(self):
                raise RuntimeError("unreachable")

        client = MCPClient()

        with pytest.raises(RuntimeError):
            await client.connect(BrokenServer(make_server("Broken")))

        assert client.state == ConnectionState.DISCONNECTED

    @pytest.mark.asyncio
    async def test_context_manager_disconnects(self):
        """Test that leaving the context drops the connection."""
        from mcp_client.client import MCPClient

        async with MCPClient() as client:
            await client.connect(make_server())
            assert client.is_connected

        assert not client.is_connected

    def test_server_satisfies_protocol(self):
        """Test that MCPServer satisfies the ToolServer protocol."""
        from mcp_client.client import ToolServer

        assert isinstance(make_server(), ToolServer)

    def test_strict_from_settings(self, monkeypatch):
        """Test that strict mode can come from the environment."""
        from mcp_client.client import MCPClient
        from shared.config import get_settings

        monkeypatch.setenv("MCP_CLIENT_STRICT_RECONNECT", "true")
        get_settings.cache_clear()
        try:
            assert MCPClient().strict is True
        finally:
            monkeypatch.delenv("MCP_CLIENT_STRICT_RECONNECT")
            get_settings.cache_clear()


class TestToolDiscovery:
    """Tests for ToolDiscovery."""

    @pytest.mark.asyncio
    async def test_lookup_and_search(self):
        """Test name lookup and search over the cached catalog."""
        from mcp_client.client import MCPClient
        from mcp_client.discovery import ToolDiscovery

        client = MCPClient()
        await client.connect(make_server(tool_names=("echo", "shout")))
        discovery = ToolDiscovery(client)

        assert (await discovery.get_tool_by_name("shout")).name == "shout"
        assert await discovery.get_tool_by_name("whisper") is None
        assert [t.name for t in await discovery.search_tools("SHO")] == ["shout"]
        assert len(await discovery.search_tools("tool")) == 2
        assert len(await discovery.get_all_tools()) == 2

    @pytest.mark.asyncio
    async def test_required_arguments(self):
        """Test required argument names come from the input schema."""
        from mcp_client.client import MCPClient
        from mcp_client.discovery import ToolDiscovery

        client = MCPClient()
        await client.connect(make_server())
        discovery = ToolDiscovery(client)

        assert await discovery.required_arguments("echo") == ["value"]
        assert await discovery.required_arguments("nope") is None

    @pytest.mark.asyncio
    async def test_requires_connection(self):
        """Test that discovery helpers propagate NotConnectedError."""
        from mcp_client.client import MCPClient, NotConnectedError
        from mcp_client.discovery import ToolDiscovery

        discovery = ToolDiscovery(MCPClient())

        with pytest.raises(NotConnectedError):
            await discovery.search_tools("echo")
