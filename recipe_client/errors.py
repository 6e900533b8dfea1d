"""
Error types raised by the Recipe API client.

Every failure reaches the caller as a single ApiError carrying one
human-readable message:

- ApiTransportError: no HTTP response was obtained at all. The message
  embeds the resolved backend base URL and a remediation hint.
- ApiStatusError: a response arrived with a failing status. The message is
  taken from the response body when possible.

Malformed response bodies are not errors; the payload is decoded as None.
"""

from enum import Enum
from typing import Any, Optional


class TransportErrorKind(str, Enum):
    """Best-effort category of a transport failure."""
    NETWORK = "network"
    CORS = "cors"
    UNKNOWN = "unknown"


NETWORK_ERROR_MARKERS = (
    "failed to fetch",
    "networkerror",
    "connection refused",
    "all connection attempts failed",
    "name or service not known",
    "nodename nor servname",
    "network is unreachable",
    "temporary failure in name resolution",
)

CORS_ERROR_MARKERS = (
    "cors",
    "blocked by",
)


def classify_transport_error(message: Optional[str]) -> TransportErrorKind:
    """
    Classify a transport error message by keyword matching.

    This is heuristic: it only looks at the error text, so misclassification
    is possible and falls back to UNKNOWN. Network markers are checked before
    CORS markers.

    Args:
        message: Raw text of the underlying transport exception

    Returns:
        TransportErrorKind for the message
    """
    text = (message or "").lower()
    if any(marker in text for marker in NETWORK_ERROR_MARKERS):
        return TransportErrorKind.NETWORK
    if any(marker in text for marker in CORS_ERROR_MARKERS):
        return TransportErrorKind.CORS
    return TransportErrorKind.UNKNOWN


def transport_error_hint(kind: TransportErrorKind, base_url: str) -> str:
    """Build the remediation hint attached to a transport failure."""
    base_hint = f"Backend base resolved to {base_url}."
    if kind == TransportErrorKind.NETWORK:
        return f"{base_hint} Network error. Backend may be down or URL is wrong (RECIPE_API_BASE)."
    if kind == TransportErrorKind.CORS:
        return f"{base_hint} CORS blocked. Configure server CORS to allow this client's origin."
    return f"{base_hint} Ensure the backend is running and reachable from this client."


class ApiError(Exception):
    """Base class for all errors raised by the Recipe API client."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ApiTransportError(ApiError):
    """
    Raised when no response could be obtained from the backend.

    Attributes:
        category: Heuristic classification of the failure
        base_url: Backend base URL the request was resolved against
        url: Full request URL
    """

    def __init__(self, message: str, category: TransportErrorKind, base_url: str, url: str):
        super().__init__(message)
        self.category = category
        self.base_url = base_url
        self.url = url


class ApiStatusError(ApiError):
    """
    Raised when the backend responds with a failing HTTP status.

    Attributes:
        status: HTTP status code
        payload: Decoded response body (JSON value, text, or None)
    """

    def __init__(self, message: str, status: int, payload: Any = None):
        super().__init__(message)
        self.status = status
        self.payload = payload
