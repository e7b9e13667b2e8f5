# =============================================================================
# coupon_proxy/registry.py  -  The fixed tool catalog
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Declares the five tools the server exposes, with the JSON Schema each
#   tool's arguments must satisfy, and validates incoming arguments against
#   that schema.
#
#   One generic tool ("http.request") proxies any method/path to BASE_URL.
#   The other four are fixed shortcuts over it:
#     coupon.create               →  POST /coupons
#     coupon.get                  →  GET  /coupons/{id}
#     coupon.list                 →  GET  /coupons?...
#     jutuike.public_promo_list   →  GET  /api/mcp/jutuike/public_promo_list?...
#
#   The catalog is built once at import time and never mutated, so
#   list_tools() is a pure read.
# =============================================================================

from typing import Any, Optional

from jsonschema import Draft202012Validator

from coupon_proxy.errors import InvalidArguments
from coupon_proxy.models import ToolDescriptor, ToolName

BASE_URL = "https://mcpcounpon.onrender.com"

COUPONS_PATH = "/coupons"
PUBLIC_PROMO_LIST_PATH = "/api/mcp/jutuike/public_promo_list"

HTTP_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]

_QUERY_SCHEMA: dict[str, Any] = {"type": "object", "additionalProperties": True}

TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name=ToolName.HTTP_REQUEST.value,
        description=(
            "Generic HTTP request tool. Proxies to the configured BASE_URL. No auth, no DB. "
            "For example, GET /coupons, POST /coupons, GET /coupons/{id}."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "method": {"type": "string", "enum": HTTP_METHODS},
                "path": {"type": "string", "description": "Path starting with /. Example: /coupons"},
                "query": _QUERY_SCHEMA,
                "headers": {"type": "object", "additionalProperties": True},
                "body": {
                    "description": "JSON body for POST/PUT/PATCH",
                    "anyOf": [
                        {"type": "object"},
                        {"type": "array"},
                        {"type": "string"},
                        {"type": "number"},
                        {"type": "boolean"},
                        {"type": "null"},
                    ],
                },
            },
            "required": ["method", "path"],
            "additionalProperties": False,
        },
    ),
    ToolDescriptor(
        name=ToolName.COUPON_CREATE.value,
        description="Create a coupon via POST /coupons with JSON body.",
        input_schema={
            "type": "object",
            "properties": {
                "body": {"type": "object", "additionalProperties": True},
            },
            "required": ["body"],
            "additionalProperties": False,
        },
    ),
    ToolDescriptor(
        name=ToolName.COUPON_GET.value,
        description="Get a coupon by id via GET /coupons/{id}.",
        input_schema={
            "type": "object",
            "properties": {
                "id": {"type": "string"},
            },
            "required": ["id"],
            "additionalProperties": False,
        },
    ),
    ToolDescriptor(
        name=ToolName.COUPON_LIST.value,
        description="List coupons via GET /coupons with optional query params.",
        input_schema={
            "type": "object",
            "properties": {"query": _QUERY_SCHEMA},
            "additionalProperties": False,
        },
    ),
    ToolDescriptor(
        name=ToolName.PUBLIC_PROMO_LIST.value,
        description="GET /api/mcp/jutuike/public_promo_list with optional query params.",
        input_schema={
            "type": "object",
            "properties": {"query": _QUERY_SCHEMA},
            "additionalProperties": False,
        },
    ),
)

_TOOLS_BY_NAME: dict[str, ToolDescriptor] = {tool.name: tool for tool in TOOLS}
_VALIDATORS: dict[str, Draft202012Validator] = {
    tool.name: Draft202012Validator(tool.input_schema) for tool in TOOLS
}


def list_tools() -> list[dict[str, Any]]:
    """Return the catalog in wire form (name, description, inputSchema)."""
    return [tool.to_dict() for tool in TOOLS]


def get_descriptor(name: Any) -> Optional[ToolDescriptor]:
    if not isinstance(name, str):
        return None
    return _TOOLS_BY_NAME.get(name)


def _describe(error) -> str:
    location = "/".join(str(part) for part in error.absolute_path)
    return f"{location}: {error.message}" if location else error.message


def validate_arguments(descriptor: ToolDescriptor, arguments: Any) -> None:
    """Check ``arguments`` against the descriptor's input schema.

    Raises:
        InvalidArguments: listing every violation, in a stable order.
    """
    validator = _VALIDATORS[descriptor.name]
    errors = sorted(validator.iter_errors(arguments), key=lambda e: [str(part) for part in e.absolute_path])
    if errors:
        raise InvalidArguments(descriptor.name, [_describe(error) for error in errors])
