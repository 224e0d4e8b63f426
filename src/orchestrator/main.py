"""Orchestrator demo - one agent driving two independent servers.

Runs the example workflow: use the CRM tools, switch to the mail server,
then onboard a customer by threading the CRM's response into an email.
"""

import asyncio
from typing import Any

from shared.config import get_settings
from shared.logging import get_logger, setup_logging
from mcp_client.client import MCPClient
from mcp_client.discovery import ToolDiscovery
from domains import create_crm_server, create_email_server
from orchestrator.driver import AgentDriver, format_tool_result

logger = get_logger(__name__)


async def run_demo() -> dict[str, Any]:
    """
    Run the example multi-server workflow.

    Returns:
        Summary of the results produced along the way
    """
    crm_server = create_crm_server()
    email_server = create_email_server()

    for server in (crm_server, email_server):
        logger.info("Server available", server=server.info.name, version=server.info.version)

    driver = AgentDriver(MCPClient())
    discovery = ToolDiscovery(driver.client)
    summary: dict[str, Any] = {}

    async with driver.session(crm_server):
        required = await discovery.required_arguments("create_customer")
        logger.info("create_customer requires", arguments=required)

        search = await driver.call("search_customers", {"query": "tech"})
        logger.info("Search result", output=format_tool_result(search))

        stats = await driver.call("get_revenue_stats", {})
        logger.info("Revenue stats", output=format_tool_result(stats))

        created = await driver.call(
            "create_customer",
            {"name": "New Startup LLC", "email": "founder@newstartup.com", "revenue": 50000}
        )
        logger.info("New customer", output=format_tool_result(created))

        summary["search"] = search.result
        summary["stats"] = stats.result
        summary["created"] = created.result

    async with driver.session(email_server):
        sent = await driver.call(
            "send_email",
            {
                "to": "customer@example.com",
                "subject": "Welcome to our service!",
                "body": "Thank you for signing up. We are excited to work with you.",
            }
        )
        logger.info("Email sent", output=format_tool_result(sent))
        summary["sent"] = sent.result

    summary["onboarding"] = await driver.onboard_customer(
        crm_server,
        email_server,
        name="Agent Test Corp",
        email="test@agentcorp.com",
        revenue=100000
    )

    logger.info("Workflow completed", connected=driver.client.is_connected)
    return summary


def main() -> None:
    """Run the demo workflow."""
    settings = get_settings()
    setup_logging(settings.log_level, json_output=settings.json_logs)

    asyncio.run(run_demo())


if __name__ == "__main__":
    main()
