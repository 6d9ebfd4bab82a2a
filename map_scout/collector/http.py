# map_scout/collector/http.py
"""
Default fetch capability: HTTP GET over aiohttp with timeout, concurrency cap and optional retry/backoff.
"""
from __future__ import annotations

import asyncio
import random
from typing import Optional, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from map_scout.collector.models import ResourceResponse
from map_scout.config import CollectorConfig
from map_scout.errors import ResourceFetchError
from map_scout.logger import logger


class HttpResourceFetcher:
    """Performs the network fetches behind :class:`~map_scout.collector.fetcher.MapFetcher`."""

    _RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)

    def __init__(self, config: CollectorConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None
        self._semaphore = asyncio.Semaphore(config.max_concurrency)

    async def __aenter__(self) -> HttpResourceFetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent, **self.config.headers},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch_resource(self, url: str) -> ResourceResponse:
        """
        GET *url*.

        Returns ResourceResponse with content=None for non-2xx statuses.
        Raises ResourceFetchError when no response could be obtained.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        attempts = 0
        async with self._semaphore:
            while True:
                try:
                    async with self.session.get(url) as resp:
                        status = resp.status
                        if status in self._RETRY_STATUS and attempts < self.config.retry_times:
                            raise ClientError(f"retryable status {status}")
                        if not 200 <= status < 300:
                            return ResourceResponse(content=None, status=status)
                        body = await resp.read()
                        return ResourceResponse(
                            content=body.decode(resp.charset or "utf-8", errors="replace"),
                            status=status,
                        )
                except asyncio.TimeoutError as exc:
                    # no retry on timeout
                    raise ResourceFetchError(f"Timed out fetching {url}") from exc
                except ClientError as exc:
                    attempts += 1
                    if attempts > self.config.retry_times:
                        raise ResourceFetchError(str(exc) or type(exc).__name__) from exc
                    backoff = min(60, 2**attempts + random.random())
                    logger.debug("Retry %d/%d for %s after %.2f s", attempts, self.config.retry_times, url, backoff)
                    await asyncio.sleep(backoff)


__all__ = ["HttpResourceFetcher"]
