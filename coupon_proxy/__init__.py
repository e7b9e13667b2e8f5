# =============================================================================
# coupon_proxy/__init__.py
# =============================================================================
# This package contains ALL request-translation logic for the coupon server.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or any protocol framework.
#   It knows how to turn a tool invocation into an HTTP request and how to
#   turn the HTTP response back into a result envelope.  The MCP wiring
#   lives in coupon_mcp/.
# =============================================================================

from coupon_proxy.dispatcher import CouponDispatcher
from coupon_proxy.models import Invocation, ResultEnvelope
from coupon_proxy.registry import BASE_URL, list_tools

__all__ = [
    "BASE_URL",
    "CouponDispatcher",
    "Invocation",
    "ResultEnvelope",
    "list_tools",
]
