"""Request body rules: which methods carry a body, and how it goes on the wire."""

import json
from typing import Any, Optional

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def needs_body(method: Any) -> bool:
    """True only for POST, PUT and PATCH, in any casing."""
    return str(method or "").upper() in BODY_METHODS


def serialize_body(body: Any) -> Optional[str]:
    """Turn a caller-supplied body into the string that is sent.

    None means no body.  Strings are sent as-is.  Anything else is encoded as
    compact JSON, falling back to ``str(body)`` when it is not JSON-encodable.
    """
    if body is None:
        return None
    if isinstance(body, str):
        return body
    try:
        return json.dumps(body, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError):
        return str(body)
