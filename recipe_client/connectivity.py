"""
Backend connectivity probe.

A diagnostic for the UI: checks whether the backend answers at all by
trying GET /health and then GET /. It never raises and is independent of
the business operations in recipe_client.api.
"""

import logging
from typing import List, Optional

import httpx

from recipe_client.config import BaseUrlResolver
from recipe_client.models import ProbeResult
from recipe_client.routes import HEALTH_PATH
from recipe_client.transport import decode_response_body

logger = logging.getLogger(__name__)


class ConnectivityProbe:
    """
    Best-effort reachability check against the backend.

    Args:
        resolver: Base URL resolver (default: BaseUrlResolver with default sources)
        transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        timeout: Optional timeout in seconds per attempt; None disables timeouts
    """

    def __init__(
        self,
        resolver: Optional[BaseUrlResolver] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.resolver = resolver or BaseUrlResolver()
        self.transport = transport
        self.timeout = timeout

    def candidate_urls(self) -> List[str]:
        base = self.resolver.resolve()
        return [f"{base}{HEALTH_PATH}", f"{base}/"]

    async def check(self) -> ProbeResult:
        """
        Check backend reachability.

        Candidates are tried one after another. The first one that produces
        any HTTP response (even an error status) is reported.

        Returns:
            ProbeResult; ok=False and status=0 with the first candidate URL
            when no candidate could be reached
        """
        urls = self.candidate_urls()
        for url in urls:
            try:
                async with httpx.AsyncClient(
                    transport=self.transport,
                    timeout=self.timeout,
                    follow_redirects=True,
                ) as client:
                    response = await client.get(url)
                return ProbeResult(
                    ok=response.is_success,
                    status=response.status_code,
                    url=url,
                    body=decode_response_body(response),
                )
            except Exception as e:
                # Diagnostic only: try the next candidate
                logger.debug("Connectivity check failed for %s: %s", url, e)
        return ProbeResult(ok=False, status=0, url=urls[0], body=None)
