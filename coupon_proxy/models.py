# =============================================================================
# coupon_proxy/models.py  -  Data Models (the "nouns" of the proxy)
# =============================================================================
#
# These dataclasses define the shape of everything that flows through one
# tool call:
#
#   Invocation  →  <ToolArgs>  →  OutboundRequest  →  ResultContent
#                                                  →  ResultEnvelope
#
# They carry almost no behavior.  The only methods here are the ones that
# turn a model into the plain dict the MCP layer puts on the wire, and the
# ones that lift a validated argument dict into a typed struct.
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


# -----------------------------------------------------------------------------
# ToolName - the fixed set of tools this server answers to
# -----------------------------------------------------------------------------
class ToolName(str, Enum):
    HTTP_REQUEST = "http.request"
    COUPON_CREATE = "coupon.create"
    COUPON_GET = "coupon.get"
    COUPON_LIST = "coupon.list"
    PUBLIC_PROMO_LIST = "jutuike.public_promo_list"

    @classmethod
    def lookup(cls, name: Any) -> Optional["ToolName"]:
        """Return the member whose value is ``name``, or None."""
        try:
            return cls(name)
        except ValueError:
            return None


# -----------------------------------------------------------------------------
# ToolDescriptor - one catalog entry, as shown to the client on "list tools"
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolDescriptor:
    """A tool's name, human description, and JSON Schema for its arguments."""

    name: str
    description: str
    input_schema: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


# -----------------------------------------------------------------------------
# Invocation - one "call tool" request from the client
# -----------------------------------------------------------------------------
@dataclass
class Invocation:
    """A tool name plus its argument bag.  Missing arguments mean ``{}``."""

    name: str
    arguments: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.arguments is None:
            self.arguments = {}


# -----------------------------------------------------------------------------
# Per-tool argument structs
# -----------------------------------------------------------------------------
# Built only after the raw arguments passed schema validation, so the
# from_arguments() constructors can index required keys directly.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class HttpRequestArgs:
    """Arguments of the generic pass-through tool."""

    method: str
    path: str
    query: Optional[dict[str, Any]] = None
    headers: Optional[dict[str, Any]] = None
    body: Any = None

    @classmethod
    def from_arguments(cls, arguments: dict[str, Any]) -> "HttpRequestArgs":
        return cls(
            method=arguments["method"],
            path=arguments["path"],
            query=arguments.get("query"),
            headers=arguments.get("headers"),
            body=arguments.get("body"),
        )


@dataclass(frozen=True)
class CouponCreateArgs:
    body: dict[str, Any]

    @classmethod
    def from_arguments(cls, arguments: dict[str, Any]) -> "CouponCreateArgs":
        return cls(body=arguments["body"])


@dataclass(frozen=True)
class CouponGetArgs:
    id: str

    @classmethod
    def from_arguments(cls, arguments: dict[str, Any]) -> "CouponGetArgs":
        return cls(id=arguments["id"])


@dataclass(frozen=True)
class QueryArgs:
    """Arguments of the list-style tools: an optional flat query map."""

    query: Optional[dict[str, Any]] = None

    @classmethod
    def from_arguments(cls, arguments: dict[str, Any]) -> "QueryArgs":
        return cls(query=arguments.get("query"))


ToolArgs = Union[HttpRequestArgs, CouponCreateArgs, CouponGetArgs, QueryArgs]


# -----------------------------------------------------------------------------
# OutboundRequest - the HTTP request a strategy hands to the executor
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class OutboundRequest:
    method: str                        # GET | POST | PUT | PATCH | DELETE
    url: str                           # absolute, query string included
    headers: dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None         # None means "send no body"


# -----------------------------------------------------------------------------
# ResultContent - what one upstream response decodes to
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class JsonContent:
    json: Any
    type: str = field(default="json", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "json": self.json}


@dataclass(frozen=True)
class TextContent:
    text: str
    type: str = field(default="text", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "text": self.text}


ResultContent = Union[JsonContent, TextContent]


# -----------------------------------------------------------------------------
# ResultEnvelope - the one thing every invocation returns
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ResultEnvelope:
    """Content list plus an error flag.

    An error envelope is still a normal return value; ``is_error`` only tells
    the client that the call did not reach (or could not be built for) the
    upstream service.
    """

    content: list[ResultContent]
    is_error: bool = False

    @classmethod
    def success(cls, item: ResultContent) -> "ResultEnvelope":
        return cls(content=[item])

    @classmethod
    def error(cls, text: str) -> "ResultEnvelope":
        return cls(content=[TextContent(text)], is_error=True)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"content": [item.to_dict() for item in self.content]}
        if self.is_error:
            payload["isError"] = True
        return payload
