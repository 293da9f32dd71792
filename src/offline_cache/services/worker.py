"""Cache worker service.

Wires the router, strategies and lifecycle together behind an event
source, the same shape a browser service worker has: one handler each
for install, activate, fetch and message.
"""

import logging
from collections.abc import Mapping
from typing import Any

from offline_cache.config import Settings, settings
from offline_cache.entities import RequestEntity, ResponseEntity, StrategyKind
from offline_cache.protocols import CacheStorage, Fetcher
from offline_cache.services.cache_store_manager import CacheStoreManager
from offline_cache.services.events import EventSource
from offline_cache.services.lifecycle import LifecycleController
from offline_cache.services.router import RequestRouter
from offline_cache.services.strategies import (
    CacheFirst,
    FetchStrategy,
    NetworkFirst,
    StaleWhileRevalidate,
)

logger = logging.getLogger(__name__)


class CacheWorker:
    """Caching layer for the web client.

    Depends on PROTOCOLS, not concrete implementations:
    - CacheStorage: in-process dictionaries, Redis, ...
    - Fetcher: httpx, or a scripted fake in tests

    Example:
        ```python
        from offline_cache.repositories import HttpxFetcher, MemoryCacheStorage
        from offline_cache.services import CacheWorker

        worker = CacheWorker.create(
            storage=MemoryCacheStorage(),
            fetcher=HttpxFetcher.create(),
        )
        await worker.install()
        response = await worker.handle_fetch(request)
        ```
    """

    def __init__(
        self,
        manager: CacheStoreManager,
        fetcher: Fetcher,
        router: RequestRouter,
        lifecycle: LifecycleController,
        origin: str,
    ) -> None:
        self._manager = manager
        self._fetcher = fetcher
        self._router = router
        self._lifecycle = lifecycle
        self._origin = origin
        self._revalidator = StaleWhileRevalidate(fetcher)
        self._strategies: dict[StrategyKind, FetchStrategy] = {
            StrategyKind.NETWORK_FIRST: NetworkFirst(fetcher),
            StrategyKind.CACHE_FIRST: CacheFirst(fetcher),
            StrategyKind.STALE_WHILE_REVALIDATE: self._revalidator,
        }

        self._events = EventSource()
        self._events.add_listener("install", self._on_install)
        self._events.add_listener("activate", self._on_activate)
        self._events.add_listener("fetch", self._on_fetch)
        self._events.add_listener("message", self._on_message)

    @classmethod
    def create(
        cls,
        storage: CacheStorage,
        fetcher: Fetcher,
        config: Settings | None = None,
    ) -> "CacheWorker":
        """Factory method to create a CacheWorker from settings.

        Args:
            storage: Cache storage backend (required).
            fetcher: Network fetcher (required).
            config: Settings to use. If None, uses the global settings.

        Returns:
            Configured CacheWorker
        """
        config = config or settings
        manager = CacheStoreManager.create(
            storage=storage,
            prefix=config.cache_prefix,
            version=config.cache_version,
        )
        core_requests = [RequestEntity.for_path(config.upstream_url, path) for path in config.core_assets]
        return cls(
            manager=manager,
            fetcher=fetcher,
            router=RequestRouter(api_prefix=config.api_prefix, bundle_prefix=config.bundle_prefix),
            lifecycle=LifecycleController(
                manager=manager,
                fetcher=fetcher,
                core_requests=core_requests,
                skip_waiting_on_install=config.skip_waiting_on_install,
            ),
            origin=config.upstream_url,
        )

    # Public API: each call goes through the event source

    async def install(self) -> None:
        await self._events.dispatch("install")

    async def activate(self) -> list[str]:
        return await self._events.dispatch("activate")

    async def handle_fetch(self, request: RequestEntity) -> ResponseEntity:
        """Answer an intercepted request.

        Raises:
            NetworkError: Only for pass-through requests the network could not serve
        """
        return await self._events.dispatch("fetch", request)

    async def post_message(self, data: Mapping[str, Any] | None) -> bool:
        return await self._events.dispatch("message", data)

    # Event handlers

    async def _on_install(self) -> None:
        await self._lifecycle.install()

    async def _on_activate(self) -> list[str]:
        return await self._lifecycle.activate()

    async def _on_fetch(self, request: RequestEntity) -> ResponseEntity:
        if not self._lifecycle.is_controlling:
            logger.debug("Not controlling yet, passing %s %s through", request.method, request.url)
            return await self._fetcher.fetch(request)

        route = self._router.route(request)
        if route is None:
            logger.debug("Passing %s %s through", request.method, request.url)
            return await self._fetcher.fetch(request)

        logger.debug("%s %s -> %s (%s)", request.method, request.url, route.strategy.value, route.partition.value)
        partition = await self._manager.open_kind(route.partition)
        return await self._strategies[route.strategy].handle(request, partition)

    async def _on_message(self, data: Mapping[str, Any] | None) -> bool:
        return await self._lifecycle.handle_message(data)

    # Introspection and shutdown

    async def status(self) -> dict[str, Any]:
        """Get worker status: version, lifecycle state and partition sizes."""
        return {
            "version": self._manager.partitions.version,
            "state": self._lifecycle.state.value,
            "controlling": self._lifecycle.is_controlling,
            "partitions": await self._manager.get_stats(),
            "pending_revalidations": self._revalidator.pending,
        }

    async def is_healthy(self) -> bool:
        return await self._manager.storage.health_check()

    async def drain(self) -> None:
        """Wait for background revalidations to finish."""
        await self._revalidator.drain()

    async def close(self) -> None:
        await self.drain()
        await self._fetcher.close()
        await self._manager.storage.close()

    @property
    def origin(self) -> str:
        return self._origin

    @property
    def lifecycle(self) -> LifecycleController:
        return self._lifecycle

    @property
    def manager(self) -> CacheStoreManager:
        return self._manager

    @property
    def router(self) -> RequestRouter:
        return self._router
