import asyncio
import json

import httpx
import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from coupon_mcp.server import create_server, to_tool_result
from coupon_proxy.models import JsonContent, ResultEnvelope, TextContent
from coupon_proxy.registry import list_tools


def _call(server, name, arguments):
    async def go():
        async with Client(server) as client:
            return await client.call_tool_mcp(name, arguments)

    return asyncio.run(go())


def test_server_lists_the_registry_catalog(upstream):
    server = create_server(upstream.dispatcher())

    async def go():
        async with Client(server) as client:
            return await client.list_tools()

    tools = {
        tool.name: {"name": tool.name, "description": tool.description, "inputSchema": tool.inputSchema}
        for tool in asyncio.run(go())
    }
    assert tools == {tool["name"]: tool for tool in list_tools()}


def test_listed_http_request_schema_rejects_extra_properties(upstream):
    server = create_server(upstream.dispatcher())

    async def go():
        async with Client(server) as client:
            return await client.list_tools()

    schema = {tool.name: tool.inputSchema for tool in asyncio.run(go())}["http.request"]
    assert schema["additionalProperties"] is False
    assert schema["required"] == ["method", "path"]
    assert schema["properties"]["headers"] == {"type": "object", "additionalProperties": True}


def test_extra_arguments_are_rejected_not_dropped(upstream):
    result = _call(create_server(upstream.dispatcher()), "coupon.list", {"query": {}, "extra": 1})

    assert result.isError is True
    assert "Invalid arguments:" in result.content[0].text
    assert "'extra' was unexpected" in result.content[0].text
    assert upstream.requests == []


def test_json_result_is_sent_as_text_and_structured_content(upstream):
    result = _call(create_server(upstream.dispatcher()), "coupon.get", {"id": "c1"})

    assert result.isError is False
    assert json.loads(result.content[0].text) == {"path": "/coupons/c1"}
    assert result.structuredContent == {"path": "/coupons/c1"}


def test_list_query_reaches_upstream(upstream):
    _call(create_server(upstream.dispatcher()), "coupon.list", {"query": {"status": ["active", "expired"]}})
    assert "status=active&status=expired" in str(upstream.last.url)


def test_transport_failure_is_reported_with_is_error(make_upstream):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = _call(create_server(make_upstream(refuse).dispatcher()), "coupon.list", {})

    assert result.isError is True
    assert "Request failed: connection refused" in result.content[0].text


def test_error_envelope_raises_tool_error():
    with pytest.raises(ToolError, match="Unknown tool: coupon.delete"):
        to_tool_result(ResultEnvelope.error("Unknown tool: coupon.delete"))


def test_non_object_json_is_wrapped_for_structured_content():
    result = to_tool_result(ResultEnvelope.success(JsonContent([1, 2])))

    assert result.structured_content == {"result": [1, 2]}
    assert result.content[0].text == "[1, 2]"


def test_text_result_has_no_structured_content():
    result = to_tool_result(ResultEnvelope.success(TextContent("Status 500: boom")))

    assert result.structured_content is None
    assert result.content[0].text == "Status 500: boom"
