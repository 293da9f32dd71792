"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Worker and handlers stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from offline_cache.config import Settings, settings
from offline_cache.exceptions import InstallError
from offline_cache.handlers import ControlHandler, ProxyHandler
from offline_cache.log import get_logger, setup_logging
from offline_cache.protocols import CacheStorage
from offline_cache.repositories import HttpxFetcher, MemoryCacheStorage, RedisCacheStorage
from offline_cache.services import CacheWorker

logger = get_logger(__name__)


def build_storage(config: Settings) -> CacheStorage:
    """Create the storage backend selected by CACHE_BACKEND."""
    if config.uses_redis:
        return RedisCacheStorage.create(config)
    return MemoryCacheStorage.create()


def build_worker(config: Settings | None = None) -> CacheWorker:
    """Create a worker with the configured storage and an httpx fetcher."""
    config = config or settings
    return CacheWorker.create(
        storage=build_storage(config),
        fetcher=HttpxFetcher.create(timeout=config.fetch_timeout),
        config=config,
    )


def get_worker(request: Request) -> CacheWorker:
    """Dependency injection for CacheWorker from app.state.

    Raises:
        RuntimeError: If the worker is not initialized
    """
    worker = getattr(request.app.state, "cache_worker", None)
    if worker is None:
        raise RuntimeError("CacheWorker not initialized. Check lifespan setup.")
    return worker


def get_proxy_handler(request: Request) -> ProxyHandler:
    """Dependency injection for ProxyHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "proxy_handler", None)
    if handler is None:
        raise RuntimeError("ProxyHandler not initialized. Check lifespan setup.")
    return handler


def get_control_handler(request: Request) -> ControlHandler:
    """Dependency injection for ControlHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "control_handler", None)
    if handler is None:
        raise RuntimeError("ControlHandler not initialized. Check lifespan setup.")
    return handler


def make_lifespan(
    worker: CacheWorker | None = None,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Build the lifespan context manager.

    Args:
        worker: Pre-built worker (tests inject one with a scripted upstream).
            If None, one is built from settings at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Initializes the worker and handlers, stores them in app.state,
        runs install (and activation), and closes everything on shutdown.
        """
        setup_logging()
        cache_worker = worker or build_worker()

        app.state.cache_worker = cache_worker
        app.state.proxy_handler = ProxyHandler(worker=cache_worker)
        app.state.control_handler = ControlHandler(worker=cache_worker)

        try:
            await cache_worker.install()
        except InstallError as e:
            logger.warning("%s; passing all traffic through until /_worker/update succeeds", e)

        logger.info(
            "Cache worker %s for %s is %s",
            cache_worker.manager.partitions.version,
            cache_worker.origin,
            cache_worker.lifecycle.state.value,
        )

        yield

        await cache_worker.close()
        del app.state.control_handler
        del app.state.proxy_handler
        del app.state.cache_worker
        logger.info("Cache worker shut down")

    return lifespan


# Type aliases for cleaner dependency injection
WorkerDep = Annotated[CacheWorker, Depends(get_worker)]
ProxyHandlerDep = Annotated[ProxyHandler, Depends(get_proxy_handler)]
ControlHandlerDep = Annotated[ControlHandler, Depends(get_control_handler)]
