# =============================================================================
# coupon_proxy/responses.py  -  Upstream response decoding
# =============================================================================
#
# read_response() turns one httpx response into exactly one ResultContent:
#
#   content-type contains application/json AND body parses
#       → JsonContent(value)
#   anything else (other type, no type, body does not parse)
#       → TextContent("Status <code>: <raw body>")
#
# The status code never decides the branch.  A 404 with a JSON body is
# JsonContent; classifying failures is the dispatcher's job.
# =============================================================================

from dataclasses import dataclass
from typing import Any

import httpx

from coupon_proxy.models import JsonContent, ResultContent, TextContent

JSON_MEDIA_TYPE = "application/json"


@dataclass(frozen=True)
class DecodeOutcome:
    """Result of a structured decode attempt: ``ok`` tells whether ``value`` is usable."""

    ok: bool
    value: Any = None


def is_json_response(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type") or ""
    return JSON_MEDIA_TYPE in content_type.lower()


def decode_json(response: httpx.Response) -> DecodeOutcome:
    """Attempt to parse an already-read body as JSON."""
    try:
        return DecodeOutcome(ok=True, value=response.json())
    except (ValueError, RecursionError):
        # ValueError covers JSONDecodeError and UnicodeDecodeError;
        # RecursionError comes from pathologically nested arrays/objects
        return DecodeOutcome(ok=False)


def text_fallback(response: httpx.Response) -> TextContent:
    return TextContent(f"Status {response.status_code}: {response.text}")


async def read_response(response: httpx.Response) -> ResultContent:
    """Read the body of ``response`` and decode it into a ResultContent."""
    await response.aread()

    if is_json_response(response):
        outcome = decode_json(response)
        if outcome.ok:
            return JsonContent(outcome.value)

    return text_fallback(response)
