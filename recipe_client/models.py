"""
Data models for the Recipe API client.

RequestDescriptor describes one outgoing call. ProbeResult and SessionState
are pydantic models since they cross into the UI and storage layers.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class RequestDescriptor:
    """
    A single request to the backend.

    Attributes:
        path: Request path relative to the base URL, may include a query string
        method: HTTP method (GET, POST, DELETE, ...)
        body: JSON-serializable body, or None to send no body
        headers: Extra headers merged over the defaults
    """
    path: str
    method: str = "GET"
    body: Any = None
    headers: Optional[Dict[str, str]] = None


class ProbeResult(BaseModel):
    """Outcome of a connectivity check against the backend."""
    ok: bool = Field(..., description="Whether the backend answered with a 2xx status")
    status: int = Field(..., description="HTTP status code, 0 when no response was obtained")
    url: str = Field(..., description="URL that produced the result (first candidate when all failed)")
    body: Any = Field(None, description="Decoded response body (JSON value or text), if any")


class SessionState(BaseModel):
    """Persisted auth state of the current user."""
    token: Optional[str] = Field(None, description="Opaque bearer token")
    user: Any = Field(None, description="User value returned by the auth endpoints, stored as-is")
