"""
Bearer token provider slot.

The client never stores tokens. A session collaborator registers a provider
callable here and the transport client asks it for the current token right
before each protected request, so token rotation and logout take effect on
the very next call.
"""

from typing import Callable, Optional

TokenProvider = Callable[[], Optional[str]]


class TokenSlot:
    """
    Holds the single registered token provider.

    Only one provider is active at a time; the last registration wins.
    """

    def __init__(self, provider: Optional[TokenProvider] = None):
        self._provider = provider

    def set_token_provider(self, provider: Optional[TokenProvider]) -> None:
        """
        Register the token provider, replacing any previous one.

        Args:
            provider: Callable returning the current token or None.
                      Pass None to unregister.
        """
        self._provider = provider

    def current_token(self) -> Optional[str]:
        """Return the provider's current token, or None if there is none."""
        if self._provider is None:
            return None
        token = self._provider()
        # Empty string means no token
        return token or None
