"""
HTTP transport for the Recipe backend.

This module is the single place where requests are actually sent. It:
- resolves the backend base URL on every call
- attaches the bearer token to protected endpoints only
- encodes request bodies as JSON and decodes JSON or text responses
- turns transport failures and failing statuses into ApiError subclasses

Each call opens its own httpx.AsyncClient, so calls share no connection or
cookie state and may run concurrently in any order.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from recipe_client.auth import TokenSlot
from recipe_client.config import BaseUrlResolver
from recipe_client.errors import (
    ApiStatusError,
    ApiTransportError,
    classify_transport_error,
    transport_error_hint,
)
from recipe_client.models import RequestDescriptor
from recipe_client.routes import Visibility, classify_path, normalize_path

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def is_json_response(response: httpx.Response) -> bool:
    """Whether the response declares a JSON content type."""
    return JSON_CONTENT_TYPE in response.headers.get("content-type", "")


def decode_response_body(response: httpx.Response) -> Any:
    """
    Decode a response body as JSON or text according to its content type.

    A body declared as JSON that fails to parse decodes to None.
    """
    if not is_json_response(response):
        return response.text
    try:
        return response.json()
    except ValueError:
        logger.debug("Malformed JSON body (status %d), using None", response.status_code)
        return None


def error_message_for(payload: Any, status: int, is_json: bool) -> str:
    """
    Pick the message for a failing response.

    Priority: "detail", then "error"/"message" (JSON bodies only), then the
    raw text body, then "HTTP <status>". Only one source is used.
    """
    if isinstance(payload, dict):
        detail = payload.get("detail")
        if detail:
            return str(detail)
        if is_json:
            fallback = payload.get("error") or payload.get("message")
            if fallback:
                return str(fallback)
    if isinstance(payload, str) and payload:
        return payload
    return f"HTTP {status}"


class TransportClient:
    """
    Sends requests to the Recipe backend and normalizes the outcome.

    Args:
        resolver: Base URL resolver (default: BaseUrlResolver with default sources)
        token_slot: Token provider slot read before each protected call
        transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        timeout: Optional timeout in seconds; None disables timeouts
    """

    def __init__(
        self,
        resolver: Optional[BaseUrlResolver] = None,
        token_slot: Optional[TokenSlot] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.resolver = resolver or BaseUrlResolver()
        self.token_slot = token_slot or TokenSlot()
        self.transport = transport
        self.timeout = timeout

    @property
    def base_url(self) -> str:
        return self.resolver.resolve()

    def build_headers(self, path: str, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """
        Build request headers for a path.

        Visibility is decided before the token is read, so public
        endpoints never get an Authorization header.
        """
        headers = {"Content-Type": JSON_CONTENT_TYPE}
        if extra:
            headers.update(extra)
        if classify_path(path) == Visibility.PROTECTED:
            token = self.token_slot.current_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self.transport,
            timeout=self.timeout,
            follow_redirects=True,
        )

    async def send(self, descriptor: RequestDescriptor) -> Any:
        """
        Send a request and return the decoded payload.

        Args:
            descriptor: Request to send

        Returns:
            Decoded JSON value, response text, or None for a malformed JSON body

        Raises:
            ApiTransportError: If no usable response was obtained
            ApiStatusError: If the response status is not 2xx
        """
        base = self.base_url
        path = normalize_path(descriptor.path)
        url = f"{base}{path}"
        headers = self.build_headers(path, descriptor.headers)
        content = json.dumps(descriptor.body) if descriptor.body is not None else None

        logger.debug("%s %s", descriptor.method, url)
        try:
            async with self._client() as client:
                response = await client.request(
                    descriptor.method,
                    url,
                    headers=headers,
                    content=content,
                )
        except httpx.RequestError as e:
            # Connection failures, redirect loops and undecodable bodies alike
            text = str(e)
            category = classify_transport_error(text)
            hint = transport_error_hint(category, base)
            logger.warning("Request failed url=%s base=%s message=%r", url, base, text)
            message = f"{text} - {hint}" if text else hint
            raise ApiTransportError(message, category=category, base_url=base, url=url) from e

        payload = decode_response_body(response)
        if not response.is_success:
            message = error_message_for(payload, response.status_code, is_json_response(response))
            logger.debug("%s %s returned %d: %s", descriptor.method, url, response.status_code, message)
            raise ApiStatusError(message, status=response.status_code, payload=payload)
        return payload

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Shorthand for send(RequestDescriptor(path, method, body, headers))."""
        return await self.send(RequestDescriptor(path=path, method=method, body=body, headers=headers))
