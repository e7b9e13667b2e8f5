# =============================================================================
# coupon_proxy/urls.py  -  Target URL construction
# =============================================================================
#
# build_url(base, path, query) is the only way a strategy produces a URL.
#
# RULES:
#   - "coupons" and "/coupons" are the same path; an empty path is "/".
#   - base + path must parse as an absolute URL, otherwise MalformedURL.
#   - query is a flat mapping:
#       list/tuple value  →  one parameter per element, in order
#       scalar value      →  exactly one parameter (replaces an existing one)
#       None              →  skipped
# =============================================================================

from collections.abc import Mapping
from typing import Any, Optional

import httpx

from coupon_proxy.errors import MalformedURL


def normalize_path(path: Any) -> str:
    """Return ``path`` as a string that starts with ``/``."""
    text = str(path or "")
    return text if text.startswith("/") else f"/{text}"


def stringify_param(value: Any) -> str:
    """Render one query value the way the upstream expects it.

    Booleans are lowercase and a None element inside a list is ``null``.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_url(base: str, path: Any = None, query: Optional[Mapping[str, Any]] = None) -> str:
    """Compose ``base + path`` and append ``query``.

    Args:
        base: Absolute base address, e.g. "https://mcpcounpon.onrender.com".
        path: Relative path; a leading "/" is added when missing.
        query: Optional flat mapping of query parameters.

    Returns:
        The absolute URL as a string.

    Raises:
        MalformedURL: if the concatenation is not an absolute URL.
    """
    raw = f"{base}{normalize_path(path)}"
    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as exc:
        raise MalformedURL(raw, str(exc)) from exc
    if not url.is_absolute_url or not url.host:
        raise MalformedURL(raw, "not an absolute URL")

    if isinstance(query, Mapping):
        for key, value in query.items():
            name = str(key)
            if isinstance(value, (list, tuple)):
                for item in value:
                    url = url.copy_add_param(name, stringify_param(item))
            elif value is not None:
                url = url.copy_set_param(name, stringify_param(value))

    return str(url)
