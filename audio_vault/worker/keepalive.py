"""
Keep-alive pinger.

Some hosts put free instances to sleep after a period without traffic. When
KEEPALIVE_URL is set, the API lifespan starts this loop, which GETs the URL
(normally the service's own /api/health-check) every
KEEPALIVE_INTERVAL_SECONDS.

A failed ping is logged and the loop carries on; the task only ends when the
application cancels it on shutdown.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


@dataclass
class PingResult:
    """Outcome of one keep-alive request."""

    success: bool
    status_code: Optional[int] = None
    error_message: Optional[str] = None


class KeepAlivePinger:
    """
    Periodic GET against a fixed URL.

    Usage:
        pinger = KeepAlivePinger("https://vault.example.com/api/health-check", 840)
        task = asyncio.create_task(pinger.run())
        ...
        task.cancel()
    """

    def __init__(
        self,
        url: str,
        interval_seconds: float,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.url = url
        self.interval_seconds = interval_seconds
        self.timeout = timeout
        self._client = client

    async def ping(self, client: httpx.AsyncClient) -> PingResult:
        try:
            response = await client.get(self.url)
        except httpx.HTTPError as e:
            logger.warning("Keep-alive ping to %s failed: %s", self.url, e)
            return PingResult(success=False, error_message=str(e))

        if response.is_success:
            logger.debug("Keep-alive ping to %s: %d", self.url, response.status_code)
            return PingResult(success=True, status_code=response.status_code)

        logger.warning("Keep-alive ping to %s returned %d", self.url, response.status_code)
        return PingResult(success=False, status_code=response.status_code)

    async def run(self) -> None:
        """Ping forever, sleeping between requests. Cancel the task to stop."""
        logger.info("Keep-alive pinger started for %s every %ss", self.url, self.interval_seconds)
        client = self._client or httpx.AsyncClient(timeout=self.timeout)
        try:
            while True:
                await asyncio.sleep(self.interval_seconds)
                await self.ping(client)
        finally:
            if self._client is None:
                await client.aclose()
            logger.info("Keep-alive pinger stopped")


def start_keepalive(url: str, interval_seconds: float) -> Optional[asyncio.Task]:
    """Start the pinger as a background task, or return None when no URL is configured."""
    if not url:
        return None
    return asyncio.create_task(KeepAlivePinger(url, interval_seconds).run(), name="keepalive")
