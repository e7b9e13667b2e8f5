import httpx
import pytest

from coupon_proxy.errors import MalformedURL
from coupon_proxy.urls import build_url, normalize_path

BASE = "https://coupons.test"


@pytest.mark.parametrize("path", ["coupons", "coupons/abc", "api/mcp/jutuike/public_promo_list"])
def test_missing_leading_slash_is_added(path):
    query = {"page": 2}
    assert build_url(BASE, path, query) == build_url(BASE, f"/{path}", query)


@pytest.mark.parametrize("path", [None, ""])
def test_empty_path_is_root(path):
    assert normalize_path(path) == "/"
    assert build_url(BASE, path) == "https://coupons.test/"


def test_sequence_value_appends_one_param_per_element_in_order():
    url = httpx.URL(build_url(BASE, "/coupons", {"status": ["active", "expired", "draft"]}))
    assert url.params.get_list("status") == ["active", "expired", "draft"]
    assert "status=active&status=expired&status=draft" in str(url)


def test_scalar_values_are_stringified_and_none_is_skipped():
    url = httpx.URL(build_url(BASE, "/coupons", {"page": 3, "active": True, "q": None}))
    assert url.params.get("page") == "3"
    assert url.params.get("active") == "true"
    assert "q" not in url.params


def test_scalar_replaces_existing_param_from_path():
    url = httpx.URL(build_url(BASE, "/coupons?page=1", {"page": 5}))
    assert url.params.get_list("page") == ["5"]


def test_empty_sequence_adds_nothing():
    assert build_url(BASE, "/coupons", {"status": []}) == "https://coupons.test/coupons"


def test_non_mapping_query_is_ignored():
    assert build_url(BASE, "/coupons", ["a", "b"]) == "https://coupons.test/coupons"


@pytest.mark.parametrize("base", ["not a url", "", "/relative/only"])
def test_non_absolute_base_raises_malformed_url(base):
    with pytest.raises(MalformedURL) as excinfo:
        build_url(base, "/coupons")
    assert excinfo.value.code == "malformed_url"
