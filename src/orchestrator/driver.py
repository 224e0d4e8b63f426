"""Agent driver - sequences connect, discover, call and disconnect.

The driver is caller logic layered on the client. Results from one
server are threaded into calls against another by the driver itself;
the protocol keeps no state across connections.
"""

import json
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from shared.logging import get_logger
from shared.models import ToolResult, ToolSchema
from mcp_client.client import MCPClient, ToolServer

logger = get_logger(__name__)


class WorkflowStepError(Exception):
    """A workflow step needed a successful tool result and got a failure."""

    def __init__(self, tool_name: str, result: ToolResult) -> None:
        self.tool_name = tool_name
        self.result = result
        super().__init__(f"Step '{tool_name}' failed: {result.error}")


class AgentDriver:
    """
    Drives a single client across one or more servers.

    Usage::

        driver = AgentDriver(MCPClient())
        async with driver.session(crm_server) as tools:
            result = await driver.call("search_customers", {"query": "tech"})
    """

    def __init__(self, client: Optional[MCPClient] = None) -> None:
        self.client = client or MCPClient()

    @asynccontextmanager
    async def session(self, server: ToolServer) -> AsyncIterator[list[ToolSchema]]:
        """Connect to a server for the duration of the block."""
        await self.client.connect(server)
        try:
            tools = await self.client.discover_tools()
            logger.info(
                "Available tools",
                server=server.info.name,
                tools=[t.name for t in tools]
            )
            yield tools
        finally:
            await self.client.disconnect()

    async def call(self, name: str, arguments: Optional[dict[str, Any]] = None) -> ToolResult:
        """Execute a tool on the active server."""
        result = await self.client.call_tool(name, arguments or {})

        logger.info(
            "Tool result",
            tool=name,
            call_id=result.id,
            success=result.success,
            execution_time_ms=round(result.execution_time_ms, 3)
        )
        return result

    async def require(self, name: str, arguments: Optional[dict[str, Any]] = None) -> Any:
        """
        Execute a tool and return its payload.

        Raises:
            WorkflowStepError: If the tool reports a failure
        """
        result = await self.call(name, arguments)
        if not result.success:
            raise WorkflowStepError(name, result)
        return result.result

    async def onboard_customer(
        self,
        crm_server: ToolServer,
        mail_server: ToolServer,
        name: str,
        email: str,
        revenue: float = 0
    ) -> dict[str, Any]:
        """
        Create a customer on the CRM server, then welcome them by email.

        The recipient and greeting come from the CRM's response, not from
        the caller's input.

        Returns:
            The created customer and the sent email
        """
        async with self.session(crm_server):
            created = await self.require(
                "create_customer",
                {"name": name, "email": email, "revenue": revenue}
            )

        customer = created["customer"]

        async with self.session(mail_server):
            sent = await self.require(
                "send_email",
                {
                    "to": customer["email"],
                    "subject": "Welcome!",
                    "body": f"Hi {customer['name']}, welcome to our platform!",
                }
            )

        logger.info("Customer onboarded", customer_id=customer["id"], email_id=sent["email"]["id"])
        return {"customer": customer, "email": sent["email"]}


def format_tool_result(result: ToolResult) -> str:
    """Format a tool result for display."""
    if result.success:
        if result.result is None:
            return "Tool executed successfully."

        if isinstance(result.result, str):
            return result.result

        return json.dumps(result.result, indent=2, default=str)

    return f"Tool error: {result.error}"
