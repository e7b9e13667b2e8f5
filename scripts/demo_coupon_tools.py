"""Spawn the server over stdio and call every tool once, for manual checks.

Example:
    python -m scripts.demo_coupon_tools
    python -m scripts.demo_coupon_tools c-123      # also fetch one coupon
"""

import asyncio
import json
import sys
from pathlib import Path

from fastmcp import Client

SERVER_SCRIPT = Path(__file__).resolve().parents[1] / "main.py"


def _show(title: str, result) -> None:
    print(f"\n{title}")
    print("isError:", bool(result.isError))
    for block in result.content:
        print(getattr(block, "text", block))


async def run_demo(coupon_id: str | None) -> None:
    async with Client(str(SERVER_SCRIPT)) as client:
        tools = await client.list_tools()
        print("tools:", json.dumps([tool.name for tool in tools]))

        _show("coupon.list()", await client.call_tool_mcp("coupon.list", {}))
        _show(
            "coupon.list(status=[active, expired])",
            await client.call_tool_mcp("coupon.list", {"query": {"status": ["active", "expired"]}}),
        )
        _show(
            "jutuike.public_promo_list(page=1)",
            await client.call_tool_mcp("jutuike.public_promo_list", {"query": {"page": 1}}),
        )
        _show(
            "http.request(GET /coupons)",
            await client.call_tool_mcp("http.request", {"method": "GET", "path": "coupons"}),
        )
        if coupon_id:
            _show(f"coupon.get({coupon_id})", await client.call_tool_mcp("coupon.get", {"id": coupon_id}))


def main() -> None:
    coupon_id = sys.argv[1] if len(sys.argv) > 1 else None
    asyncio.run(run_demo(coupon_id))


if __name__ == "__main__":
    main()
