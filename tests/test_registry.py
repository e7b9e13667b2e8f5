import pytest

from coupon_proxy.errors import InvalidArguments
from coupon_proxy.models import ToolName
from coupon_proxy.registry import TOOLS, get_descriptor, list_tools, validate_arguments


def test_catalog_has_the_five_tools_with_unique_names():
    names = [tool["name"] for tool in list_tools()]
    assert names == [
        "http.request",
        "coupon.create",
        "coupon.get",
        "coupon.list",
        "jutuike.public_promo_list",
    ]
    assert {member.value for member in ToolName} == set(names)


def test_list_tools_uses_wire_field_names_and_is_repeatable():
    first = list_tools()
    assert set(first[0]) == {"name", "description", "inputSchema"}
    first[0]["name"] = "mutated"
    assert list_tools()[0]["name"] == "http.request"


def test_get_descriptor():
    assert get_descriptor("coupon.get") is TOOLS[2]
    assert get_descriptor("coupon.delete") is None
    assert get_descriptor(None) is None


def test_required_fields_are_declared():
    assert get_descriptor("http.request").input_schema["required"] == ["method", "path"]
    assert get_descriptor("coupon.create").input_schema["required"] == ["body"]
    assert get_descriptor("coupon.get").input_schema["required"] == ["id"]
    assert "required" not in get_descriptor("coupon.list").input_schema


@pytest.mark.parametrize(
    "name, arguments",
    [
        ("http.request", {"method": "DELETE", "path": "/coupons/1"}),
        ("http.request", {"method": "POST", "path": "/coupons", "body": [1, 2], "headers": {"x": "1"}}),
        ("coupon.create", {"body": {}}),
        ("coupon.get", {"id": "c1"}),
        ("coupon.list", {}),
        ("jutuike.public_promo_list", {"query": {"page": 1, "tags": ["a", "b"]}}),
    ],
)
def test_valid_arguments_pass(name, arguments):
    validate_arguments(get_descriptor(name), arguments)


@pytest.mark.parametrize(
    "name, arguments, fragment",
    [
        ("coupon.get", {}, "'id' is a required property"),
        ("coupon.get", {"id": 7}, "id: 7 is not of type 'string'"),
        ("http.request", {"method": "FETCH", "path": "/"}, "method:"),
        ("coupon.list", {"query": {}, "extra": 1}, "Additional properties are not allowed"),
        ("coupon.create", {"body": "raw"}, "body: 'raw' is not of type 'object'"),
    ],
)
def test_invalid_arguments_raise_with_violation(name, arguments, fragment):
    with pytest.raises(InvalidArguments) as excinfo:
        validate_arguments(get_descriptor(name), arguments)
    assert excinfo.value.message.startswith("Invalid arguments: ")
    assert fragment in excinfo.value.message
    assert excinfo.value.tool == name
