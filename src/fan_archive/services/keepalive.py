"""Periodic self-ping that keeps free-tier hosts from idling the service.

The worker issues ``GET /health`` against the public URL on a fixed interval.
Failures are logged and otherwise ignored.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from fan_archive.core.settings import settings

logger = logging.getLogger(__name__)


class KeepAliveWorker:
    """Background task pinging a health URL every `interval` seconds."""

    def __init__(
        self,
        url: str | None = None,
        *,
        interval: float | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url or settings.keepalive_target
        self.interval = max(1.0, float(interval or settings.keepalive_interval_seconds))
        self.timeout = float(timeout or settings.keepalive_timeout_seconds)
        self._client = client
        self._owns_client = client is None
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the background ping loop."""
        if self.running:
            return
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        self._stopping.clear()
        self._task = asyncio.create_task(self._run())
        logger.info("Keep-alive ping scheduled every %.0f seconds for %s", self.interval, self.url)

    async def stop(self) -> None:
        """Stop the loop and release the HTTP client."""
        if self._task is not None:
            self._stopping.set()
            await self._task
            self._task = None
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def ping_once(self) -> bool:
        """Issue one health request; return True on a 2xx response."""
        client = self._client
        if client is None:
            async with httpx.AsyncClient(timeout=self.timeout) as temp_client:
                return await self._ping(temp_client)
        return await self._ping(client)

    async def _ping(self, client: httpx.AsyncClient) -> bool:
        try:
            response = await client.get(self.url, timeout=self.timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Keep-alive ping error: %s", exc)
            return False
        if response.is_success:
            logger.info("Keep-alive ping successful")
            return True
        logger.warning("Keep-alive ping failed with status: %s", response.status_code)
        return False

    async def _run(self) -> None:
        while not self._stopping.is_set():
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self.interval)
            except TimeoutError:
                await self.ping_once()
