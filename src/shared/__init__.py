"""Shared models, configuration and logging for the tool protocol."""

from shared.models import (
    ConnectionState,
    InputSchema,
    PropertySchema,
    ServerInfo,
    ToolCall,
    ToolImplementation,
    ToolResult,
    ToolSchema,
)
from shared.config import Settings, get_settings
from shared.logging import get_logger, setup_logging
from shared.schema import ToolArgumentError, create_tool_schema, validate_arguments

__all__ = [
    "ConnectionState",
    "InputSchema",
    "PropertySchema",
    "ServerInfo",
    "ToolCall",
    "ToolImplementation",
    "ToolResult",
    "ToolSchema",
    "Settings",
    "get_settings",
    "get_logger",
    "setup_logging",
    "ToolArgumentError",
    "create_tool_schema",
    "validate_arguments",
]
