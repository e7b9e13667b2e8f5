# =============================================================================
# coupon_proxy/dispatcher.py  -  Tool invocation → HTTP call → envelope
# =============================================================================
#
# HOW ONE CALL FLOWS:
#   1. Look the tool name up in ToolName; unknown names stop here.
#   2. Validate the arguments against the tool's declared schema.
#   3. BUILD: the tool's strategy turns its typed args into an
#      OutboundRequest (url via build_url, body via serialize_body).
#   4. EXECUTE: exactly one HTTP request, response decoded by read_response.
#   5. Wrap the content (or the failure) in a ResultEnvelope.
#
# FAILURE POLICY:
#   dispatch() never raises.  Unknown tools, invalid arguments, malformed
#   URLs and transport failures all come back as isError envelopes.
#   Upstream 4xx/5xx responses are NOT failures; they are decoded like any
#   other response.
#
# CONCURRENCY:
#   The dispatcher only holds immutable configuration.  Every call opens its
#   own httpx.AsyncClient, so concurrent calls share nothing.
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional
from urllib.parse import quote

import httpx

from coupon_proxy.body import needs_body, serialize_body
from coupon_proxy.errors import InvalidArguments, UnknownTool
from coupon_proxy.models import (
    CouponCreateArgs,
    CouponGetArgs,
    HttpRequestArgs,
    Invocation,
    OutboundRequest,
    QueryArgs,
    ResultContent,
    ResultEnvelope,
    ToolArgs,
    ToolName,
)
from coupon_proxy.registry import (
    BASE_URL,
    COUPONS_PATH,
    PUBLIC_PROMO_LIST_PATH,
    get_descriptor,
    list_tools,
    validate_arguments,
)
from coupon_proxy.responses import read_response
from coupon_proxy.settings import DEFAULT_HTTP_TIMEOUT
from coupon_proxy.urls import build_url

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"

# Characters encodeURIComponent leaves alone besides the RFC 3986 unreserved set
_ID_SAFE_CHARS = "!~*'()"


# =============================================================================
# Strategies: one builder per tool
# =============================================================================
def _header_overrides(headers: Optional[dict[str, Any]]) -> dict[str, str]:
    if not headers:
        return {}
    return {str(key): str(value) for key, value in headers.items() if value is not None}


def build_http_request(args: HttpRequestArgs, base_url: str) -> OutboundRequest:
    """Generic pass-through: everything comes from the caller."""
    headers = httpx.Headers({"content-type": JSON_CONTENT_TYPE})
    # Headers.update replaces case-insensitively, so "Content-Type" wins
    headers.update(_header_overrides(args.headers))
    return OutboundRequest(
        method=str(args.method).upper(),
        url=build_url(base_url, args.path, args.query),
        headers=dict(headers.items()),
        body=serialize_body(args.body) if needs_body(args.method) else None,
    )


def build_coupon_create(args: CouponCreateArgs, base_url: str) -> OutboundRequest:
    # body is required by the schema, so it is always an object here
    return OutboundRequest(
        method="POST",
        url=build_url(base_url, COUPONS_PATH),
        headers={"content-type": JSON_CONTENT_TYPE},
        body=serialize_body(args.body),
    )


def build_coupon_get(args: CouponGetArgs, base_url: str) -> OutboundRequest:
    coupon_id = quote(str(args.id), safe=_ID_SAFE_CHARS)
    return OutboundRequest(method="GET", url=build_url(base_url, f"{COUPONS_PATH}/{coupon_id}"))


def build_coupon_list(args: QueryArgs, base_url: str) -> OutboundRequest:
    return OutboundRequest(method="GET", url=build_url(base_url, COUPONS_PATH, args.query))


def build_public_promo_list(args: QueryArgs, base_url: str) -> OutboundRequest:
    return OutboundRequest(method="GET", url=build_url(base_url, PUBLIC_PROMO_LIST_PATH, args.query))


@dataclass(frozen=True)
class Strategy:
    """How to parse one tool's arguments and build its request."""

    args_type: type
    build: Callable[[Any, str], OutboundRequest]

    def build_request(self, arguments: dict[str, Any], base_url: str) -> OutboundRequest:
        args: ToolArgs = self.args_type.from_arguments(arguments)
        return self.build(args, base_url)


STRATEGIES: dict[ToolName, Strategy] = {
    ToolName.HTTP_REQUEST: Strategy(HttpRequestArgs, build_http_request),
    ToolName.COUPON_CREATE: Strategy(CouponCreateArgs, build_coupon_create),
    ToolName.COUPON_GET: Strategy(CouponGetArgs, build_coupon_get),
    ToolName.COUPON_LIST: Strategy(QueryArgs, build_coupon_list),
    ToolName.PUBLIC_PROMO_LIST: Strategy(QueryArgs, build_public_promo_list),
}


def _failure_message(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


# =============================================================================
# Dispatcher
# =============================================================================
class CouponDispatcher:
    """Routes tool invocations to strategies and executes them against ``base_url``.

    Args:
        base_url: Upstream base address.  Defaults to BASE_URL.
        timeout: httpx timeout in seconds, or None for no timeout.
        transport: Optional httpx async transport (tests pass a MockTransport).
    """

    def __init__(
        self,
        base_url: str = BASE_URL,
        *,
        timeout: Optional[float] = DEFAULT_HTTP_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    def list_tools(self) -> list[dict[str, Any]]:
        return list_tools()

    async def call(self, name: str, arguments: Optional[dict[str, Any]] = None) -> ResultEnvelope:
        return await self.dispatch(Invocation(name=name, arguments=arguments))

    async def dispatch(self, invocation: Invocation) -> ResultEnvelope:
        tool = ToolName.lookup(invocation.name)
        descriptor = get_descriptor(invocation.name)
        if tool is None or descriptor is None:
            error = UnknownTool(invocation.name)
            logger.warning("%s", error.message)
            return ResultEnvelope.error(error.message)

        try:
            validate_arguments(descriptor, invocation.arguments)
            request = STRATEGIES[tool].build_request(invocation.arguments, self.base_url)
        except InvalidArguments as exc:
            logger.warning("%s rejected: %s", tool.value, exc.to_dict())
            return ResultEnvelope.error(exc.message)
        except Exception as exc:
            logger.warning("%s could not be built: %r", tool.value, exc)
            return ResultEnvelope.error(f"Request failed: {_failure_message(exc)}")

        try:
            content = await self._execute(request)
        except Exception as exc:
            logger.warning("%s %s failed: %r", request.method, request.url, exc)
            return ResultEnvelope.error(f"Request failed: {_failure_message(exc)}")

        return ResultEnvelope.success(content)

    async def _execute(self, request: OutboundRequest) -> ResultContent:
        logger.debug("%s %s", request.method, request.url)
        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            async with client.stream(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            ) as response:
                logger.debug("%s %s -> %s", request.method, request.url, response.status_code)
                return await read_response(response)
