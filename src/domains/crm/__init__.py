"""CRM Domain - customer registry tools.

Example tool set for customer management operations.
Demonstrates:
- Tool definitions built from parameter lists
- State owned by the tool set instance
- Lock-guarded mutations
"""

from typing import Any, Optional

from pydantic import BaseModel

from shared.logging import get_logger
from domains.base import ToolSet
from mcp_server.server import MCPServer

logger = get_logger(__name__)


class Customer(BaseModel):
    """A customer record."""
    id: str
    name: str
    email: str
    revenue: float = 0


def default_customers() -> list[Customer]:
    """Seed records for a fresh CRM."""
    return [
        Customer(id="1", name="Acme Corp", email="contact@acme.com", revenue=150000),
        Customer(id="2", name="TechStart Inc", email="info@techstart.com", revenue=75000),
        Customer(id="3", name="Global Solutions", email="hello@global.com", revenue=200000),
    ]


class CustomerStore:
    """In-memory customer records, owned by one CRM tool set."""

    def __init__(self, customers: Optional[list[Customer]] = None) -> None:
        self._customers: list[Customer] = list(customers or [])

    def __len__(self) -> int:
        return len(self._customers)

    def all(self) -> list[Customer]:
        return list(self._customers)

    def search(self, query: str, limit: int) -> list[Customer]:
        query = query.lower()
        matches = [
            c for c in self._customers
            if query in c.name.lower() or query in c.email.lower()
        ]
        return matches[:limit]

    def add(self, name: str, email: str, revenue: float = 0) -> Customer:
        customer = Customer(
            id=str(len(self._customers) + 1),
            name=name,
            email=email,
            revenue=revenue
        )
        self._customers.append(customer)
        return customer


class CRMToolSet(ToolSet):
    """
    CRM tools.

    Provides tools for:
    - Customer search
    - Customer creation
    - Revenue statistics
    """

    domain = "crm"

    def __init__(self, store: Optional[CustomerStore] = None) -> None:
        self.store = store if store is not None else CustomerStore(default_customers())
        super().__init__()

    def _define_tools(self) -> None:
        self._define(
            "search_customers",
            "Search for customers in the CRM by name or email",
            [
                {"name": "query", "type": "string", "description": "Search query"},
                {"name": "limit", "type": "number", "description": "Max results", "default": 10},
            ],
            self._search_customers
        )

        self._define(
            "create_customer",
            "Create a new customer in the CRM",
            [
                {"name": "name", "type": "string", "description": "Customer name"},
                {"name": "email", "type": "string", "description": "Customer email"},
                {
                    "name": "revenue",
                    "type": "number",
                    "description": "Expected annual revenue",
                    "required": False,
                },
            ],
            self._create_customer
        )

        self._define(
            "get_revenue_stats",
            "Get revenue statistics across all customers",
            [],
            self._get_revenue_stats
        )

    async def _search_customers(self, params: dict[str, Any]) -> dict[str, Any]:
        limit = int(params.get("limit") or 10)

        async with self._lock:
            results = self.store.search(params["query"], limit)

        return {
            "found": len(results),
            "customers": [c.model_dump() for c in results],
        }

    async def _create_customer(self, params: dict[str, Any]) -> dict[str, Any]:
        async with self._lock:
            customer = self.store.add(
                name=params["name"],
                email=params["email"],
                revenue=params.get("revenue") or 0
            )

        logger.info("Customer created", customer_id=customer.id)
        return {"created": True, "customer": customer.model_dump()}

    async def _get_revenue_stats(self, params: dict[str, Any]) -> dict[str, Any]:
        async with self._lock:
            revenues = [c.revenue for c in self.store.all()]

        if not revenues:
            return {
                "total_customers": 0,
                "total_revenue": 0,
                "average_revenue": 0,
                "max_revenue": 0,
                "min_revenue": 0,
            }

        total = sum(revenues)
        return {
            "total_customers": len(revenues),
            "total_revenue": total,
            "average_revenue": total / len(revenues),
            "max_revenue": max(revenues),
            "min_revenue": min(revenues),
        }


def create_crm_server(
    name: str = "CRM-Server",
    version: str = "1.0.0",
    store: Optional[CustomerStore] = None
) -> MCPServer:
    """Build a CRM server with its own customer store."""
    tool_set = CRMToolSet(store)
    server = tool_set.create_server(name, version)

    logger.info("CRM server ready", server=name, customers=len(tool_set.store))
    return server
