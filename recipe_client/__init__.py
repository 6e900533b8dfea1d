"""
Recipe API Client.

Async access layer for the Recipe backend: base URL resolution, selective
bearer-token auth, JSON encoding/decoding, classified errors and a
connectivity probe.
"""

from recipe_client.api import RecipeApi
from recipe_client.auth import TokenSlot
from recipe_client.config import BaseUrlResolver, get_api_base, set_runtime_api_base
from recipe_client.errors import ApiError, ApiStatusError, ApiTransportError, TransportErrorKind
from recipe_client.models import ProbeResult, RequestDescriptor
from recipe_client.payloads import extract_recipes
from recipe_client.session import AuthSession, FileSessionStore, MemorySessionStore
from recipe_client.transport import TransportClient

__all__ = [
    "RecipeApi",
    "TokenSlot",
    "BaseUrlResolver",
    "get_api_base",
    "set_runtime_api_base",
    "ApiError",
    "ApiStatusError",
    "ApiTransportError",
    "TransportErrorKind",
    "ProbeResult",
    "RequestDescriptor",
    "extract_recipes",
    "AuthSession",
    "FileSessionStore",
    "MemorySessionStore",
    "TransportClient",
]
