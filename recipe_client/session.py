"""
Auth session management.

AuthSession keeps the current user's bearer token and user object, persists
them across restarts through a SessionStore, and registers itself as the
token provider of a RecipeApi. Whenever the token changes (login, signup,
logout) the provider is re-registered, so the next protected request sees
the new token.

Storage failures never break the session: they are logged and the session
continues as if nothing was stored.
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from recipe_client.api import RecipeApi
from recipe_client.models import SessionState

logger = logging.getLogger(__name__)

STORAGE_KEY = "recipeapp_auth_v1"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform)."""
    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "recipe-client"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "recipe-client"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "recipe-client"
    return Path.home() / ".config" / "recipe-client"


def restored_state(state: SessionState) -> SessionState:
    """A stored state only counts as a session when it carries a token."""
    return state if state.token else SessionState()


class SessionStore:
    """Interface for persisting SessionState."""

    def load(self) -> SessionState:
        raise NotImplementedError

    def save(self, state: SessionState) -> None:
        raise NotImplementedError


class MemorySessionStore(SessionStore):
    """
    Process-local session store.

    State lives in a dict keyed by storage key, so two sessions sharing the
    same store (and key) see each other's state.
    """

    def __init__(self, key: str = STORAGE_KEY):
        self.key = key
        self._data: Dict[str, Dict[str, Any]] = {}

    def load(self) -> SessionState:
        raw = self._data.get(self.key)
        return restored_state(SessionState(**raw)) if raw else SessionState()

    def save(self, state: SessionState) -> None:
        self._data[self.key] = state.model_dump()


class FileSessionStore(SessionStore):
    """
    Session store backed by a JSON file.

    Args:
        path: File path (default: <user config dir>/recipeapp_auth_v1.json)
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else get_user_config_dir() / f"{STORAGE_KEY}.json"

    def load(self) -> SessionState:
        if not self.path.exists():
            return SessionState()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return restored_state(SessionState.model_validate(data))
        except (OSError, ValueError, ValidationError) as e:
            logger.debug("Could not read session from %s, starting empty: %s", self.path, e)
            return SessionState()

    def save(self, state: SessionState) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(state.model_dump_json(), encoding="utf-8")
        except OSError as e:
            logger.debug("Could not write session to %s: %s", self.path, e)


class AuthSession:
    """
    Current user's auth state, wired into a RecipeApi.

    Args:
        api: API whose token provider this session owns
        store: Where the state is persisted (default: MemorySessionStore)
    """

    def __init__(self, api: RecipeApi, store: Optional[SessionStore] = None):
        self.api = api
        self.store = store or MemorySessionStore()
        self._state = self.store.load()
        self._register_provider()

    @property
    def token(self) -> Optional[str]:
        return self._state.token

    @property
    def user(self) -> Any:
        return self._state.user

    @property
    def is_authenticated(self) -> bool:
        return bool(self._state.token)

    def _current_token(self) -> Optional[str]:
        return self._state.token

    def _register_provider(self) -> None:
        self.api.set_token_provider(self._current_token)

    def _set_state(self, token: Any, user: Any) -> None:
        # Tokens are opaque; whatever the backend sent is forwarded as a string
        self._state = SessionState(token=str(token) if token is not None else None, user=user)
        self.store.save(self._state)
        self._register_provider()

    async def login(self, email: str, password: str) -> Any:
        """
        Log in and adopt the returned token and user.

        Returns:
            Raw login payload

        Raises:
            ApiError: Propagated from the API; session state is unchanged
        """
        data = await self.api.login(email, password)
        payload = data if isinstance(data, dict) else {}
        self._set_state(payload.get("access_token") or None, payload.get("user") or None)
        logger.info("Logged in, authenticated=%s", self.is_authenticated)
        return data

    async def signup(self, email: str, password: str) -> Any:
        """
        Sign up; adopt token and user only if the backend returned a token.

        Returns:
            Raw signup payload
        """
        data = await self.api.signup(email, password)
        if isinstance(data, dict) and data.get("access_token"):
            self._set_state(data["access_token"], data.get("user") or None)
            logger.info("Signed up and logged in")
        return data

    def logout(self) -> None:
        """Forget the token and user."""
        self._set_state(None, None)
        logger.info("Logged out")
