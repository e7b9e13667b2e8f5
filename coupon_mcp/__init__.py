# =============================================================================
# coupon_mcp/__init__.py
# =============================================================================
# This package contains the FastMCP server.
#
# ARCHITECTURAL ROLE:
#   coupon_mcp/ is the protocol layer between MCP clients and
#   coupon_proxy/.  It:
#     1. Registers one FastMCP tool per catalog entry
#     2. Hands every call to CouponDispatcher
#     3. Turns the ResultEnvelope into an MCP tool result
#
# WHAT IT DOES NOT DO:
#   - It does not build URLs, bodies, or decode responses (coupon_proxy/)
#   - It does not decide what counts as an error (the dispatcher does)
# =============================================================================
