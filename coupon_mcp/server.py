# =============================================================================
# coupon_mcp/server.py  -  FastMCP Tool Server (all five tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the coupon catalog as MCP tools.  Each tool is a thin wrapper
#   that forwards its arguments to CouponDispatcher and converts the
#   returned ResultEnvelope into what FastMCP sends back.
#
# HOW A CALL FLOWS:
#   1. The MCP client calls a tool by name (e.g. "coupon.get")
#   2. FastMCP routes the call to the matching CatalogTool below
#   3. The tool hands the raw arguments to the dispatcher
#   4. The envelope becomes either a ToolResult (success) or a ToolError
#      (isError: true on the wire)
#
# TOOL CONTRACTS:
#   Names, descriptions and input schemas come from coupon_proxy.registry,
#   so "list tools" over MCP and CouponDispatcher.list_tools() agree.
#
# RUNNING THIS SERVER:
#   a) python main.py               (stdio transport)
#   b) python -m coupon_mcp.server
#   c) fastmcp run coupon_mcp/server.py
# =============================================================================

import copy
import json
import logging
import sys
from typing import Any, Awaitable, Callable, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import Tool, ToolResult

from coupon_proxy.dispatcher import CouponDispatcher
from coupon_proxy.models import JsonContent, ResultEnvelope, ToolDescriptor
from coupon_proxy.registry import BASE_URL, TOOLS
from coupon_proxy.settings import get_settings

SERVER_NAME = "coupon-mcp-server"

logger = logging.getLogger("coupon_mcp")


# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: with the stdio transport, STDOUT carries the MCP
# message stream and any stray line there corrupts the protocol.
#
#   CYAN    incoming tool calls (name + arguments)
#   GREEN   successful results
#   RED     error envelopes
#   YELLOW  status messages
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_RED = "\033[31m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _paint(color: str, text: str) -> str:
    if not get_settings().log_color:
        return text
    return f"{color}{text}{_RESET}"


def _log_request(tool_name: str, arguments: dict[str, Any]) -> None:
    """Log an incoming tool call with its arguments in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in arguments.items())
    logger.info(_paint(_CYAN, f"{tool_name} called with: {param_str}"))


def _log_status(message: str) -> None:
    logger.info(_paint(_YELLOW, f"  → {message}"))


def _log_response(tool_name: str, envelope: ResultEnvelope) -> ResultEnvelope:
    """Log the envelope as compact JSON, GREEN on success and RED on error."""
    color = _RED if envelope.is_error else _GREEN
    payload = json.dumps(envelope.to_dict(), separators=(",", ":"), ensure_ascii=False, default=str)
    logger.info(_paint(color, f"  ← {tool_name} response: {payload}"))
    return envelope


# =============================================================================
# Envelope → MCP result
# =============================================================================
def to_tool_result(envelope: ResultEnvelope) -> ToolResult:
    """Convert a ResultEnvelope into a FastMCP ToolResult.

    JSON content is sent both as text and as structured content; MCP requires
    structured content to be an object, so non-object JSON is wrapped under
    "result".

    Raises:
        ToolError: for error envelopes, so the client receives isError: true.
    """
    if envelope.is_error:
        raise ToolError("\n".join(item.to_dict().get("text", "") for item in envelope.content))

    item = envelope.content[0]
    if isinstance(item, JsonContent):
        structured = item.json if isinstance(item.json, dict) else {"result": item.json}
        return ToolResult(
            content=json.dumps(item.json, ensure_ascii=False),
            structured_content=structured,
        )
    return ToolResult(content=item.text)


# =============================================================================
# Catalog tools
# =============================================================================
# Each registry descriptor becomes one FastMCP Tool whose inputSchema IS the
# descriptor's schema.  Arguments are forwarded untouched, so the
# dispatcher's schema validation is the only gate and "list tools" shows
# exactly the catalog.
# =============================================================================
class CatalogTool(Tool):
    """A FastMCP tool that forwards its raw arguments to ``forward``."""

    forward: Callable[[str, dict[str, Any]], Awaitable[ToolResult]]

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        return await self.forward(self.name, arguments)

    @classmethod
    def from_descriptor(
        cls,
        descriptor: ToolDescriptor,
        forward: Callable[[str, dict[str, Any]], Awaitable[ToolResult]],
    ) -> "CatalogTool":
        return cls(
            name=descriptor.name,
            description=descriptor.description,
            parameters=copy.deepcopy(descriptor.input_schema),
            forward=forward,
        )


# =============================================================================
# Server factory
# =============================================================================
def create_server(dispatcher: Optional[CouponDispatcher] = None) -> FastMCP:
    """Build the FastMCP server with every catalog tool registered.

    Args:
        dispatcher: The dispatcher to forward calls to.  Defaults to one
            targeting BASE_URL with the timeout from settings.
    """
    if dispatcher is None:
        dispatcher = CouponDispatcher(timeout=get_settings().http_timeout)

    mcp = FastMCP(
        SERVER_NAME,
        instructions=f"Coupon tools proxying to {dispatcher.base_url}. No auth, no DB.",
    )

    async def forward(tool_name: str, arguments: dict[str, Any]) -> ToolResult:
        arguments = arguments or {}
        _log_request(tool_name, arguments)
        envelope = await dispatcher.call(tool_name, arguments)
        return to_tool_result(_log_response(tool_name, envelope))

    for descriptor in TOOLS:
        mcp.add_tool(CatalogTool.from_descriptor(descriptor, forward))

    _log_status(f"{SERVER_NAME} ready with {len(TOOLS)} tools, BASE_URL={dispatcher.base_url}")
    return mcp


# The name "coupon-mcp-server" becomes the server identity in MCP.
mcp = create_server()


def run_stdio() -> None:
    """Serve over stdio; exit with status 1 if the transport cannot run."""
    logger.info("%s started. BASE_URL=%s", SERVER_NAME, BASE_URL)
    try:
        mcp.run()
    except Exception:
        logger.exception("%s could not start", SERVER_NAME)
        sys.exit(1)


if __name__ == "__main__":
    setup_logging(get_settings().log_level)
    run_stdio()
