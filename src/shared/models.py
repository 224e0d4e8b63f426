"""Core data models for the tool-invocation protocol.

This module defines the structures that cross the client/server boundary:
tool schemas, tool calls, tool results and server metadata.
"""

from enum import Enum
from typing import Any, Callable, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


ParameterType = Literal["string", "number", "integer", "boolean", "array", "object"]


class ConnectionState(str, Enum):
    """Connection state of a client."""
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


class PropertySchema(BaseModel):
    """Definition of a single tool parameter."""
    model_config = ConfigDict(frozen=True)

    type: ParameterType
    description: str = ""
    default: Any = None
    items: Optional[dict[str, Any]] = None
    enum: Optional[tuple[Any, ...]] = None


class InputSchema(BaseModel):
    """
    Structural description of the arguments a tool accepts.

    Serializes to a JSON Schema object so handlers can validate
    their arguments against it.
    """
    model_config = ConfigDict(frozen=True)

    type: Literal["object"] = "object"
    properties: dict[str, PropertySchema] = Field(default_factory=dict)
    required: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_required(self) -> "InputSchema":
        unknown = [name for name in self.required if name not in self.properties]
        if unknown:
            raise ValueError(f"Required parameters not declared: {', '.join(unknown)}")
        return self

    def to_json_schema(self) -> dict[str, Any]:
        """Return the schema as a plain JSON Schema dict."""
        return self.model_dump(mode="json", exclude_none=True)


class ToolSchema(BaseModel):
    """
    Public description of a tool.

    This is the only part of a tool that crosses the protocol boundary;
    handlers stay on the server.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1, description="Unique tool name within a server")
    description: str = Field(..., description="Human-readable description")
    input_schema: InputSchema = Field(default_factory=InputSchema, alias="inputSchema")


ToolHandler = Callable[[dict[str, Any]], Any]


class ToolImplementation(BaseModel):
    """A tool schema paired with the handler that executes it."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    tool_schema: ToolSchema
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.tool_schema.name


class ToolCall(BaseModel):
    """
    A single invocation request.

    The id is generated by the client and only used for correlation.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolResult(BaseModel):
    """
    Response to exactly one tool call.

    A successful result carries the handler output in ``result`` and no
    ``error``; a failed result carries an error message and no ``result``.
    """
    id: str
    success: bool
    result: Any = None
    error: Optional[str] = None
    execution_time_ms: float = 0

    @model_validator(mode="after")
    def _check_outcome(self) -> "ToolResult":
        if self.success and self.error is not None:
            raise ValueError("A successful result cannot carry an error")
        if not self.success:
            if not self.error:
                raise ValueError("A failed result must carry an error message")
            if self.result is not None:
                raise ValueError("A failed result cannot carry a result payload")
        return self

    @classmethod
    def ok(cls, call_id: str, result: Any = None) -> "ToolResult":
        """Create a success result."""
        return cls(id=call_id, success=True, result=result)

    @classmethod
    def fail(cls, call_id: str, error: str) -> "ToolResult":
        """Create a failure result."""
        return cls(id=call_id, success=False, error=error)


class ServerInfo(BaseModel):
    """Server metadata, fixed for the lifetime of a server."""
    model_config = ConfigDict(frozen=True)

    name: str
    version: str = "1.0.0"
    capabilities: tuple[str, ...] = ("tools",)
