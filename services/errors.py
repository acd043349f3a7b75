from __future__ import annotations
from typing import Any, Dict, Optional, Tuple


class PulseWireError(Exception):
    """Base exception for the news proxy."""
    status_code = 500
    category = "Internal server error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(PulseWireError):
    """Upstream credential is not configured."""
    category = "Server configuration error"


class RateLimited(PulseWireError):
    """Upstream answered 429."""
    status_code = 429
    category = "Rate limit exceeded"

    def __init__(self, message: str = "Too many requests. Please try again later.", details=None):
        super().__init__(message, details)


class UpstreamError(PulseWireError):
    """Non-2xx, unreachable or malformed upstream response."""
    category = "Failed to fetch news"


class InvalidSymbolError(PulseWireError):
    """Blank or missing ticker symbol."""
    status_code = 400
    category = "Invalid symbol"


class UnexpectedError(PulseWireError):
    """Anything else. The detail stays in the server log."""

    def __init__(self, message: str = "An unexpected error occurred", details=None):
        super().__init__(message, details)


def error_response(e: Exception, upstream_category: Optional[str] = None) -> Tuple[Dict[str, str], int]:
    """
    Map an exception to the ``({"error", "message"}, status)`` pair sent to the client.
    ``upstream_category`` overrides the label used for UpstreamError.
    """
    if not isinstance(e, PulseWireError):
        e = UnexpectedError()

    category = e.category
    if isinstance(e, UpstreamError) and upstream_category:
        category = upstream_category

    return {"error": category, "message": e.message}, e.status_code
