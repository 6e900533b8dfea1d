"""
Recipe backend API.

This module is the **single source of truth** for the operations the
application performs against the Recipe backend. Each method maps to one
backend endpoint and returns the decoded payload as-is; envelope shapes
(e.g. {"results": [...]} vs. a bare list) are left to the caller, see
recipe_client.payloads.

Endpoints:
- GET    /recipes/search?q=...   (public)
- GET    /recipes/{id}           (public)
- GET    /users/me/saved         (requires auth)
- POST   /users/me/saved         (requires auth)
- DELETE /users/me/saved/{id}    (requires auth)
- POST   /auth/login
- POST   /auth/signup

# NOTE: When adding new endpoints, follow this pattern:
    - Add the path constant to recipe_client.routes
    - If the endpoint must work anonymously, add it to ROUTE_VISIBILITY
    - Add a coroutine here that builds the path/method/body and awaits
      self.client.request(...)
    - Let ApiError propagate; callers decide how to show it
"""

from typing import Any, Optional
from urllib.parse import quote

import httpx

from recipe_client.auth import TokenProvider, TokenSlot
from recipe_client.config import BaseUrlResolver
from recipe_client.connectivity import ConnectivityProbe
from recipe_client.models import ProbeResult
from recipe_client.routes import (
    LOGIN_PATH,
    RECIPES_PATH,
    SAVED_PATH,
    SEARCH_PATH,
    SIGNUP_PATH,
)
from recipe_client.transport import TransportClient

# Characters JavaScript's encodeURIComponent leaves unescaped
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_component(value: Any) -> str:
    """Percent-encode a value for use as a single path segment or query value."""
    return quote(str(value), safe=_URI_COMPONENT_SAFE)


class RecipeApi:
    """
    Named operations against the Recipe backend.

    Args:
        resolver: Base URL resolver shared by the transport and the probe
        token_slot: Slot holding the session's token provider
        transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        timeout: Optional per-request timeout in seconds; None disables timeouts

    Example:
        >>> api = RecipeApi()
        >>> api.set_token_provider(lambda: session_token)
        >>> data = await api.search("pasta")
    """

    def __init__(
        self,
        resolver: Optional[BaseUrlResolver] = None,
        token_slot: Optional[TokenSlot] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.client = TransportClient(
            resolver=resolver,
            token_slot=token_slot,
            transport=transport,
            timeout=timeout,
        )
        self.probe = ConnectivityProbe(
            resolver=self.client.resolver,
            transport=transport,
            timeout=timeout,
        )

    @property
    def base_url(self) -> str:
        """Currently resolved backend base URL."""
        return self.client.base_url

    def set_token_provider(self, provider: Optional[TokenProvider]) -> None:
        """
        Register the callable that supplies the current bearer token.

        The last registration wins. Pass a provider returning None (or None
        itself) on logout.
        """
        self.client.token_slot.set_token_provider(provider)

    async def check_connectivity(self) -> ProbeResult:
        """Run the connectivity probe. Never raises."""
        return await self.probe.check()

    async def search(self, query: Optional[str]) -> Any:
        """
        Search recipes by query string. Public endpoint.

        Args:
            query: Free-text query; None is sent as an empty query

        Returns:
            Backend payload, usually {"results": [...]} or a bare list
        """
        return await self.client.request(f"{SEARCH_PATH}?q={encode_component(query or '')}")

    async def get_recipe_by_id(self, recipe_id: Any) -> Any:
        """Get a single recipe by ID. Public endpoint."""
        return await self.client.request(f"{RECIPES_PATH}/{encode_component(recipe_id)}")

    async def list_saved(self) -> Any:
        """List the current user's saved recipes (requires auth)."""
        return await self.client.request(SAVED_PATH)

    async def save(self, recipe_id: Any) -> Any:
        """Save a recipe to the current user's collection (requires auth)."""
        return await self.client.request(SAVED_PATH, method="POST", body={"recipe_id": recipe_id})

    async def unsave(self, recipe_id: Any) -> Any:
        """Remove a recipe from the current user's collection (requires auth)."""
        return await self.client.request(f"{SAVED_PATH}/{encode_component(recipe_id)}", method="DELETE")

    async def login(self, email: str, password: str) -> Any:
        """
        Log in with email and password.

        Returns:
            Backend payload, expected shape {"access_token": ..., "user": {...}}
        """
        return await self.client.request(
            LOGIN_PATH,
            method="POST",
            body={"email": email, "password": password},
        )

    async def signup(self, email: str, password: str) -> Any:
        """
        Create an account.

        Returns:
            Backend payload; may include "access_token" and "user" when the
            backend logs the new user in directly
        """
        return await self.client.request(
            SIGNUP_PATH,
            method="POST",
            body={"email": email, "password": password},
        )
