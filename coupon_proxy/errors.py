"""
Error types raised while turning an invocation into an HTTP request.

None of these ever leave the dispatcher: CouponDispatcher.dispatch() catches
them and re-expresses them as an error-flagged ResultEnvelope.  They exist so
each failure kind has a stable ``code`` for logs and tests.
"""

from typing import Any, Optional


class CouponProxyError(Exception):
    """Base class for failures the proxy knows how to name."""

    code = "proxy_error"

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None) -> None:
        safe_message = message.strip() if isinstance(message, str) else ""
        if not safe_message:
            safe_message = "Unknown proxy error"
        super().__init__(safe_message)
        self.message = safe_message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.message,
            "code": self.code,
            "details": self.details,
            "error_type": self.__class__.__name__,
        }


class UnknownTool(CouponProxyError):
    """The invocation names a tool outside the fixed catalog."""

    code = "unknown_tool"

    def __init__(self, name: Any) -> None:
        super().__init__(f"Unknown tool: {name}", details={"name": name})
        self.name = name


class InvalidArguments(CouponProxyError):
    """The arguments do not satisfy the tool's declared input schema."""

    code = "invalid_arguments"

    def __init__(self, tool: str, violations: list[str]) -> None:
        super().__init__(
            f"Invalid arguments: {'; '.join(violations)}",
            details={"tool": tool, "violations": list(violations)},
        )
        self.tool = tool
        self.violations = list(violations)


class MalformedURL(CouponProxyError):
    """base + path does not parse as an absolute URL."""

    code = "malformed_url"

    def __init__(self, url: str, reason: str = "") -> None:
        message = f"Invalid URL: {url}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, details={"url": url})
        self.url = url
