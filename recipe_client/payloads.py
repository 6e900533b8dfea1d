"""Helpers for interpreting backend payload envelopes."""

from typing import Any, List


def extract_recipes(payload: Any) -> List[Any]:
    """
    Get the list of recipes from a search or saved-recipes payload.

    The backend may answer with {"results": [...]} or with a bare list.

    Args:
        payload: Decoded payload returned by RecipeApi

    Returns:
        List of recipe items; empty list for any other shape
    """
    if isinstance(payload, dict) and isinstance(payload.get("results"), list):
        return payload["results"]
    if isinstance(payload, list):
        return payload
    return []
