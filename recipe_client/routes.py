"""
Endpoint visibility table.

Public endpoints must work for anonymous users, so they never receive an
Authorization header even when a token is registered. An expired token
would otherwise break recipe search for logged-in users.
"""

import re
from enum import Enum
from typing import Tuple


class Visibility(str, Enum):
    """Whether an endpoint receives the bearer token."""
    PUBLIC = "public"
    PROTECTED = "protected"


SEARCH_PATH = "/recipes/search"
RECIPES_PATH = "/recipes"
SAVED_PATH = "/users/me/saved"
LOGIN_PATH = "/auth/login"
SIGNUP_PATH = "/auth/signup"
HEALTH_PATH = "/health"

# First matching pattern wins; unmatched paths are protected
ROUTE_VISIBILITY: Tuple[Tuple["re.Pattern[str]", Visibility], ...] = (
    (re.compile(r"^/recipes/search"), Visibility.PUBLIC),
    (re.compile(r"^/recipes/[^/]+$"), Visibility.PUBLIC),
)


def normalize_path(path: str) -> str:
    """Return the path with exactly one leading slash."""
    return "/" + (path or "").lstrip("/")


def classify_path(path: str) -> Visibility:
    """
    Classify a request path as public or protected.

    Args:
        path: Request path, optionally including a query string

    Returns:
        Visibility.PUBLIC for recipe search and single-recipe lookups,
        Visibility.PROTECTED for everything else
    """
    normalized = normalize_path(path)
    for pattern, visibility in ROUTE_VISIBILITY:
        if pattern.match(normalized):
            return visibility
    return Visibility.PROTECTED
