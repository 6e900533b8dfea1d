"""
Configuration management for the Recipe API client.

This module centralizes how the client finds its backend. The base URL is
resolved from an ordered list of sources, checked on every call:

1. Runtime override: RUNTIME_CONFIG["API_BASE"], set by the host process
   (see set_runtime_api_base) when the same build is deployed against
   different backends.
2. Environment: RECIPE_API_BASE, from the process environment or the .env
   file at the project root.
3. Hardcoded default: http://localhost:3001

The .env file is loaded on import with python-dotenv. Existing environment
variables take precedence, and a missing .env is a no-op.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "http://localhost:3001"
API_BASE_ENV_VAR = "RECIPE_API_BASE"
RUNTIME_API_BASE_KEY = "API_BASE"

# Populated by the host application at runtime; read fresh on every resolution
RUNTIME_CONFIG: Dict[str, Optional[str]] = {}

ConfigSource = Callable[[], Optional[str]]


def load_env_file() -> None:
    """
    Load environment variables from .env file at project root.

    Safe to call multiple times. When .env doesn't exist this is a no-op and
    platform environment variables are used.
    """
    # recipe_client/config.py -> recipe_client/ -> project root
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env", override=False)


load_env_file()


def normalize_base_url(value: Optional[str]) -> str:
    """Strip surrounding whitespace and trailing slashes from a base URL."""
    return str(value or "").strip().rstrip("/")


def runtime_override_source() -> Optional[str]:
    """Return the runtime-injected API base, if the host set one."""
    return RUNTIME_CONFIG.get(RUNTIME_API_BASE_KEY)


def environment_source(name: str = API_BASE_ENV_VAR) -> ConfigSource:
    """
    Build a source that reads the API base from an environment variable.

    Args:
        name: Environment variable name (default: RECIPE_API_BASE)

    Returns:
        Zero-argument callable returning the variable's value or None
    """
    def _read() -> Optional[str]:
        return os.getenv(name)

    return _read


def set_runtime_api_base(value: Optional[str]) -> None:
    """
    Set (or clear, with None) the runtime API base override.

    Args:
        value: Backend origin, e.g. "https://recipes.example.com"
    """
    if value is None:
        RUNTIME_CONFIG.pop(RUNTIME_API_BASE_KEY, None)
    else:
        RUNTIME_CONFIG[RUNTIME_API_BASE_KEY] = value


def default_sources() -> List[ConfigSource]:
    """Default source order: runtime override, then environment."""
    return [runtime_override_source, environment_source()]


class BaseUrlResolver:
    """
    Resolves the backend base URL from prioritized configuration sources.

    Each source is a zero-argument callable returning an optional string.
    Sources are evaluated in order on every resolve() call and the first
    non-empty value wins; if none yields a value the default is used.

    Attributes:
        sources: Ordered configuration sources
        default: Fallback origin when every source is empty
    """

    def __init__(
        self,
        sources: Optional[Sequence[ConfigSource]] = None,
        default: str = DEFAULT_API_BASE,
    ):
        self.sources = list(sources) if sources is not None else default_sources()
        self.default = default

    def resolve(self) -> str:
        """
        Resolve the backend base URL.

        Never raises: a source that fails is skipped.

        Returns:
            Base URL with trailing slashes removed
        """
        for source in self.sources:
            try:
                value = source()
            except Exception as e:
                logger.debug("API base source %r failed, skipping: %s", source, e)
                continue
            normalized = normalize_base_url(value)
            if normalized:
                return normalized
        return normalize_base_url(self.default)


def get_api_base() -> str:
    """Resolve the API base URL using the default sources."""
    return BaseUrlResolver().resolve()
