"""Fetch strategies.

Each strategy decides the order in which a partition and the network are
consulted for one request:

- NetworkFirst: freshness first, cache as offline fallback (API data)
- CacheFirst: availability first, network only on a miss (app shell)
- StaleWhileRevalidate: answer from cache, refresh in the background (bundles)

Every strategy answers an unreachable network with either cached data or
the 503 "Offline" sentinel; none of them lets NetworkError escape.
"""

import asyncio
import logging
from typing import Protocol

from offline_cache.entities import RequestEntity, ResponseEntity, StrategyKind
from offline_cache.exceptions import NetworkError
from offline_cache.protocols import Fetcher
from offline_cache.services.cache_store_manager import CachePartition

logger = logging.getLogger(__name__)


class FetchStrategy(Protocol):
    """Interface shared by the strategies."""

    kind: StrategyKind

    async def handle(self, request: RequestEntity, partition: CachePartition) -> ResponseEntity:
        ...


async def _store(partition: CachePartition, request: RequestEntity, response: ResponseEntity) -> None:
    if response.is_cacheable:
        await partition.put(request, response.clone())
    else:
        logger.debug("Not caching %s %s (status %d)", request.method, request.url, response.status)


class NetworkFirst:
    """Try the network; fall back to the partition, then to the sentinel."""

    kind = StrategyKind.NETWORK_FIRST

    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def handle(self, request: RequestEntity, partition: CachePartition) -> ResponseEntity:
        try:
            response = await self._fetcher.fetch(request)
        except NetworkError as e:
            cached = await partition.match(request)
            if cached is not None:
                logger.debug("Network failed for %s, serving cached copy: %s", request.url, e.reason)
                return cached
            logger.debug("Network failed for %s and nothing cached: %s", request.url, e.reason)
            return ResponseEntity.offline()

        await _store(partition, request, response)
        return response


class CacheFirst:
    """Serve from the partition; only a miss touches the network."""

    kind = StrategyKind.CACHE_FIRST

    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def handle(self, request: RequestEntity, partition: CachePartition) -> ResponseEntity:
        cached = await partition.match(request)
        if cached is not None:
            return cached

        try:
            response = await self._fetcher.fetch(request)
        except NetworkError as e:
            logger.debug("Network failed for uncached %s: %s", request.url, e.reason)
            return ResponseEntity.offline()

        await _store(partition, request, response)
        return response


class StaleWhileRevalidate:
    """Answer from the partition at once while a background fetch refreshes it.

    Background refreshes are tracked so that shutdown (and tests) can wait
    for them with drain().
    """

    kind = StrategyKind.STALE_WHILE_REVALIDATE

    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher
        self._pending: set[asyncio.Task] = set()
        self._awaited: set[asyncio.Task] = set()

    async def handle(self, request: RequestEntity, partition: CachePartition) -> ResponseEntity:
        revalidation = asyncio.create_task(self._revalidate(request, partition))
        self._pending.add(revalidation)
        revalidation.add_done_callback(self._on_revalidated)

        cached = await partition.match(request)
        if cached is not None:
            return cached

        # Awaited here, so errors reach the caller instead of the log
        if revalidation in self._pending:
            self._awaited.add(revalidation)
        response = await revalidation
        if response is not None:
            return response

        # Revalidation failed: one last uncached attempt
        try:
            return await self._fetcher.fetch(request)
        except NetworkError as e:
            logger.debug("Network failed twice for uncached %s: %s", request.url, e.reason)
            return ResponseEntity.offline()

    async def _revalidate(self, request: RequestEntity, partition: CachePartition) -> ResponseEntity | None:
        try:
            response = await self._fetcher.fetch(request)
        except NetworkError as e:
            logger.debug("Background revalidation of %s failed: %s", request.url, e.reason)
            return None

        await _store(partition, request, response)
        return response

    def _on_revalidated(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task in self._awaited:
            self._awaited.discard(task)
            return
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background revalidation could not update the cache", exc_info=exc)

    @property
    def pending(self) -> int:
        """Number of background refreshes still running."""
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for every outstanding background refresh to settle."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
