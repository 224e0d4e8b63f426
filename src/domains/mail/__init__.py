"""Mail Domain - email sending tools backed by an in-memory log."""

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field

from shared.logging import get_logger
from domains.base import ToolSet
from mcp_server.server import MCPServer

logger = get_logger(__name__)


class Email(BaseModel):
    """A sent email."""
    id: str
    to: str
    subject: str
    body: str
    cc: list[str] = Field(default_factory=list)
    sent_at: str


class MailLog:
    """Sent emails, oldest first, owned by one mail tool set."""

    def __init__(self) -> None:
        self._emails: list[Email] = []

    def __len__(self) -> int:
        return len(self._emails)

    def append(self, email: Email) -> None:
        self._emails.append(email)

    def recent(self, limit: int) -> list[Email]:
        return self._emails[-limit:]


class MailToolSet(ToolSet):
    """
    Mail tools.

    Sending only records the email; there is no delivery.
    """

    domain = "mail"

    def __init__(self, log: Optional[MailLog] = None) -> None:
        self.log = log if log is not None else MailLog()
        super().__init__()

    def _define_tools(self) -> None:
        self._define(
            "send_email",
            "Send an email to a recipient",
            [
                {"name": "to", "type": "string", "description": "Recipient email address"},
                {"name": "subject", "type": "string", "description": "Email subject"},
                {"name": "body", "type": "string", "description": "Email body content"},
                {
                    "name": "cc",
                    "type": "array",
                    "description": "CC recipients",
                    "items": {"type": "string"},
                    "default": [],
                },
            ],
            self._send_email
        )

        self._define(
            "get_sent_emails",
            "Retrieve recently sent emails",
            [
                {"name": "limit", "type": "number", "description": "Max emails to return", "default": 10},
            ],
            self._get_sent_emails
        )

    async def _send_email(self, params: dict[str, Any]) -> dict[str, Any]:
        email = Email(
            id=f"email_{uuid.uuid4().hex[:12]}",
            to=params["to"],
            subject=params["subject"],
            body=params["body"],
            cc=params.get("cc") or [],
            sent_at=datetime.now(timezone.utc).isoformat()
        )

        async with self._lock:
            self.log.append(email)

        logger.info("Email recorded", email_id=email.id, to=email.to)
        return {"sent": True, "email": email.model_dump()}

    async def _get_sent_emails(self, params: dict[str, Any]) -> dict[str, Any]:
        limit = int(params.get("limit") or 10)

        async with self._lock:
            count = len(self.log)
            emails = self.log.recent(limit)

        return {
            "count": count,
            "emails": [e.model_dump() for e in emails],
        }


def create_email_server(
    name: str = "Email-Server",
    version: str = "1.0.0",
    log: Optional[MailLog] = None
) -> MCPServer:
    """Build a mail server with its own email log."""
    tool_set = MailToolSet(log)
    server = tool_set.create_server(name, version)

    logger.info("Email server ready", server=name)
    return server
