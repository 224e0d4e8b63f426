"""JSON Schema helpers for tool definitions and argument validation."""

import copy
from typing import Any

from jsonschema import Draft7Validator

from shared.models import InputSchema, PropertySchema


class ToolArgumentError(ValueError):
    """Arguments passed to a tool do not match its input schema."""
    pass


def validate_schema(data: Any, schema: dict[str, Any]) -> tuple[bool, list[str]]:
    """
    Validate data against a JSON Schema.

    Args:
        data: The data to validate
        schema: JSON Schema to validate against

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    if not schema:
        return True, []

    validator = Draft7Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))

    if not errors:
        return True, []

    error_messages = [
        f"{'.'.join(str(p) for p in e.path)}: {e.message}" if e.path else e.message
        for e in errors
    ]

    return False, error_messages


def validate_arguments(
    tool_name: str,
    arguments: dict[str, Any],
    schema: InputSchema
) -> None:
    """
    Validate tool arguments, raising a descriptive error on mismatch.

    Raises:
        ToolArgumentError: If the arguments do not satisfy the schema
    """
    is_valid, errors = validate_schema(arguments, schema.to_json_schema())
    if not is_valid:
        raise ToolArgumentError(
            f"Invalid arguments for '{tool_name}': {'; '.join(errors)}"
        )


def apply_defaults(arguments: dict[str, Any], schema: InputSchema) -> dict[str, Any]:
    """Return a copy of arguments with declared defaults filled in."""
    merged = dict(arguments)
    for name, prop in schema.properties.items():
        if name not in merged and prop.default is not None:
            merged[name] = copy.deepcopy(prop.default)
    return merged


def create_tool_schema(
    parameters: list[dict[str, Any]],
    required: list[str] | None = None
) -> InputSchema:
    """
    Create an input schema from a list of parameter definitions.

    Each parameter is ``{name, type, description, required?, default?}``.
    Without an explicit ``required`` list, a parameter is required when it
    is not marked ``required: False`` and declares no default.

    Args:
        parameters: List of parameter definitions
        required: List of required parameter names

    Returns:
        Input schema for a tool
    """
    properties: dict[str, PropertySchema] = {}

    type_mapping = {
        "string": "string",
        "str": "string",
        "integer": "integer",
        "int": "integer",
        "number": "number",
        "float": "number",
        "boolean": "boolean",
        "bool": "boolean",
        "array": "array",
        "list": "array",
        "object": "object",
        "dict": "object",
    }

    for param in parameters:
        param_type = param.get("type", "string")
        if param_type not in type_mapping:
            raise ValueError(f"Unsupported parameter type '{param_type}' for '{param['name']}'")

        param_schema: dict[str, Any] = {
            "type": type_mapping[param_type],
            "description": param.get("description", ""),
        }

        if "enum" in param:
            param_schema["enum"] = tuple(param["enum"])

        if "default" in param:
            param_schema["default"] = param["default"]

        if param_schema["type"] == "array" and "items" in param:
            param_schema["items"] = param["items"]

        properties[param["name"]] = PropertySchema(**param_schema)

    if required is None:
        required = [
            p["name"] for p in parameters
            if p.get("required", True) and "default" not in p
        ]

    return InputSchema(properties=properties, required=tuple(required))
