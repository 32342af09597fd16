"""
MCP Tool definitions for the form builder.

Exposes the ``FormBuilder`` actions as MCP tools. ``handle_tool_call``
returns plain JSON-serialisable dicts; problems are reported as
``{"error": ...}`` payloads instead of being raised to the transport.
"""

import functools
import logging
from typing import Any, Callable

import anyio
from pydantic import ValidationError

from form_builder.builder import FormBuilder
from form_builder.errors import FormBuilderError, FieldDefinitionError
from form_builder.guards import validation_issues
from form_builder.models.field_definitions import FieldType

logger = logging.getLogger("form-builder-mcp")

_FIELD_PROPERTIES: dict[str, Any] = {
    "name": {
        "type": "string",
        "description": "Field label, also the key of the submitted value",
    },
    "type": {
        "type": "string",
        "enum": [t.value for t in FieldType],
        "description": "Input type",
    },
    "options": {
        "type": "array",
        "items": {"type": "string"},
        "description": "Choices, required for select, radio and checkbox",
    },
    "required": {"type": "boolean", "description": "Whether a value is required"},
    "minLength": {"type": "integer", "description": "Minimum length (text only)"},
    "maxLength": {"type": "integer", "description": "Maximum length (text only)"},
    "errorMessage": {
        "type": "string",
        "description": "Message shown on failure; defaults to a per-type message",
    },
}

_FIELD_ID = {"type": "integer", "description": "Id of the field"}

_VALUES = {
    "type": "object",
    "description": (
        "Submitted values keyed by field name. Checkbox fields take a list "
        "of checked options or the comma-separated string."
    ),
    "additionalProperties": {
        "anyOf": [{"type": "string"}, {"type": "array", "items": {"type": "string"}}]
    },
}


def get_mcp_tools() -> list[dict]:
    """
    Get MCP tool definitions for registration with MCP server.

    Returns list of tool schemas compatible with MCP protocol.
    """
    return [
        {
            "name": "list_fields",
            "description": "List the fields of the form in order.",
            "inputSchema": {"type": "object", "properties": {}},
        },
        {
            "name": "add_field",
            "description": "Add a field at the end of the form.",
            "inputSchema": {
                "type": "object",
                "properties": _FIELD_PROPERTIES,
                "required": ["name", "type"],
            },
        },
        {
            "name": "update_field",
            "description": "Change some attributes of a field. Omitted attributes are kept.",
            "inputSchema": {
                "type": "object",
                "properties": {"id": _FIELD_ID, **_FIELD_PROPERTIES},
                "required": ["id"],
            },
        },
        {
            "name": "remove_field",
            "description": "Remove a field from the form.",
            "inputSchema": {
                "type": "object",
                "properties": {"id": _FIELD_ID},
                "required": ["id"],
            },
        },
        {
            "name": "move_field",
            "description": "Move a field one position up or down.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "id": _FIELD_ID,
                    "direction": {"type": "string", "enum": ["up", "down"]},
                },
                "required": ["id", "direction"],
            },
        },
        {
            "name": "clear_fields",
            "description": "Delete every field of the form.",
            "inputSchema": {"type": "object", "properties": {}},
        },
        {
            "name": "validate_field",
            "description": "Check one value against a field and return the message to display.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "id": _FIELD_ID,
                    "value": {
                        "anyOf": [
                            {"type": "string"},
                            {"type": "array", "items": {"type": "string"}},
                        ]
                    },
                },
                "required": ["id"],
            },
        },
        {
            "name": "validate_form",
            "description": "Validate a full set of values without storing it.",
            "inputSchema": {
                "type": "object",
                "properties": {"values": _VALUES},
                "required": ["values"],
            },
        },
        {
            "name": "submit_form",
            "description": "Validate a full set of values and store it when valid.",
            "inputSchema": {
                "type": "object",
                "properties": {"values": _VALUES},
                "required": ["values"],
            },
        },
        {
            "name": "list_submissions",
            "description": "List stored submissions.",
            "inputSchema": {"type": "object", "properties": {}},
        },
        {
            "name": "export_submissions",
            "description": "Export stored submissions as CSV or JSON text.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "format": {"type": "string", "enum": ["csv", "json"], "default": "json"},
                    "path": {
                        "type": "string",
                        "description": "Optional file to write the export to",
                    },
                },
            },
        },
    ]


def _fields(builder: FormBuilder) -> list[dict]:
    return builder.schema.to_records()


def _list_fields(builder: FormBuilder, args: dict[str, Any]) -> dict[str, Any]:
    return {"fields": _fields(builder)}


def _add_field(builder: FormBuilder, args: dict[str, Any]) -> dict[str, Any]:
    field = builder.add_field(args)
    return {"field": field.to_record()}


def _update_field(builder: FormBuilder, args: dict[str, Any]) -> dict[str, Any]:
    updates = {k: v for k, v in args.items() if k != "id"}
    field = builder.edit_field(int(args["id"]), updates)
    if field is None:
        return {"error": f"No field with id {args['id']}"}
    return {"field": field.to_record()}


def _remove_field(builder: FormBuilder, args: dict[str, Any]) -> dict[str, Any]:
    builder.remove_field(int(args["id"]))
    return {"fields": _fields(builder)}


def _move_field(builder: FormBuilder, args: dict[str, Any]) -> dict[str, Any]:
    direction = args.get("direction")
    if direction == "up":
        moved = builder.move_field_up(int(args["id"]))
    elif direction == "down":
        moved = builder.move_field_down(int(args["id"]))
    else:
        return {"error": f"Unknown direction: {direction}. Use 'up' or 'down'."}
    return {"moved": moved, "fields": _fields(builder)}


def _clear_fields(builder: FormBuilder, args: dict[str, Any]) -> dict[str, Any]:
    builder.clear_form()
    return {"fields": []}


def _validate_field(builder: FormBuilder, args: dict[str, Any]) -> dict[str, Any]:
    field_id = int(args["id"])
    if builder.schema.get_field(field_id) is None:
        return {"error": f"No field with id {field_id}"}
    return {"error_message": builder.validate_value(field_id, args.get("value"))}


def _validate_form(builder: FormBuilder, args: dict[str, Any]) -> dict[str, Any]:
    result = builder.validate(args.get("values") or {})
    return {"is_valid": result.is_valid, "errors": result.errors}


def _submit_form(builder: FormBuilder, args: dict[str, Any]) -> dict[str, Any]:
    result, submission = builder.submit(args.get("values") or {})
    return {
        "is_valid": result.is_valid,
        "errors": result.errors,
        "submission": submission.model_dump() if submission else None,
    }


def _list_submissions(builder: FormBuilder, args: dict[str, Any]) -> dict[str, Any]:
    return {"submissions": [s.model_dump() for s in builder.get_submissions()]}


def _export_submissions(builder: FormBuilder, args: dict[str, Any]) -> dict[str, Any]:
    export_format = args.get("format", "json")
    path = args.get("path")
    if export_format == "csv":
        content = builder.export_csv(path)
    elif export_format == "json":
        content = builder.export_json(path)
    else:
        return {"error": f"Unknown format: {export_format}. Use 'csv' or 'json'."}
    return {"format": export_format, "path": path, "content": content}


TOOL_HANDLERS: dict[str, Callable[[FormBuilder, dict[str, Any]], dict[str, Any]]] = {
    "list_fields": _list_fields,
    "add_field": _add_field,
    "update_field": _update_field,
    "remove_field": _remove_field,
    "move_field": _move_field,
    "clear_fields": _clear_fields,
    "validate_field": _validate_field,
    "validate_form": _validate_form,
    "submit_form": _submit_form,
    "list_submissions": _list_submissions,
    "export_submissions": _export_submissions,
}


def handle_tool_call(
    builder: FormBuilder,
    name: str,
    arguments: dict[str, Any] | None,
) -> dict[str, Any]:
    """
    Run one tool against a builder.

    Args:
        builder: The builder owning the form being edited.
        name: Tool name, see ``get_mcp_tools``.
        arguments: Tool arguments.

    Returns:
        The tool result, or ``{"error": ...}``.
    """
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        return {"error": f"Unknown tool: {name}"}

    try:
        return handler(builder, dict(arguments or {}))
    except FieldDefinitionError as e:
        return {"error": str(e), "issues": e.issues}
    except ValidationError as e:
        return {"error": "Invalid arguments", "issues": validation_issues(e)}
    except (KeyError, TypeError, ValueError) as e:
        return {"error": f"Invalid arguments: {e}"}
    except FormBuilderError as e:
        logger.error(f"Error in {name}: {e}")
        return {"error": str(e)}


async def call_tool_async(
    builder: FormBuilder,
    name: str,
    arguments: dict[str, Any] | None,
) -> dict[str, Any]:
    """Run ``handle_tool_call`` in a worker thread so file I/O does not block the event loop."""
    return await anyio.to_thread.run_sync(
        functools.partial(handle_tool_call, builder, name, arguments)
    )
