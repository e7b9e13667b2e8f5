"""
Shared fixtures for the coupon proxy tests.

No test talks to the real upstream: every dispatcher is built on an
httpx.MockTransport whose handler records each request it receives.
"""

import os
import sys
from typing import Callable

import httpx
import pytest

# Ensure project root is on sys.path so package imports resolve in tests
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from coupon_proxy.dispatcher import CouponDispatcher  # noqa: E402

TEST_BASE_URL = "https://coupons.test"


class FakeUpstream:
    """Records requests and answers each with ``respond(request)``."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self.respond = respond
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return self.respond(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def dispatcher(self) -> CouponDispatcher:
        return CouponDispatcher(TEST_BASE_URL, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def upstream() -> FakeUpstream:
    """Upstream that answers every request with 200 and a JSON echo of the path."""
    return FakeUpstream(lambda request: httpx.Response(200, json={"path": request.url.path}))


@pytest.fixture
def make_upstream() -> Callable[..., FakeUpstream]:
    def _make(respond: Callable[[httpx.Request], httpx.Response]) -> FakeUpstream:
        return FakeUpstream(respond)

    return _make
