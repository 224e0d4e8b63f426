"""Example tool sets.

Each domain contains:
- Tool definitions
- The state its handlers operate on
- A factory building a server around a fresh tool set

Domains are isolated: no cross-domain calls and no shared state, so two
servers built by the same factory never interfere.
"""

from domains.base import ToolSet
from domains.crm import CRMToolSet, CustomerStore, create_crm_server
from domains.mail import MailLog, MailToolSet, create_email_server

__all__ = [
    "CRMToolSet",
    "CustomerStore",
    "MailLog",
    "MailToolSet",
    "ToolSet",
    "create_crm_server",
    "create_email_server",
]
