"""Offline Cache - caching layer for the print-shop web client.

This package provides a layered architecture for offline-capable
request caching, modelled on a browser service worker:

Layers:
    - protocols: Interface contracts (CacheStorage, Fetcher)
    - repositories: Storage backends and the network fetcher
    - services: Router, strategies, lifecycle and the CacheWorker
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from offline_cache.repositories import HttpxFetcher, MemoryCacheStorage
    from offline_cache.services import CacheWorker

    worker = CacheWorker.create(storage=MemoryCacheStorage(), fetcher=HttpxFetcher.create())
    await worker.install()
    ```

For HTTP API:
    ```python
    from offline_cache.api.app import app
    ```
"""

from offline_cache.config import get_redis_client, get_settings, settings
from offline_cache.entities import RequestEntity, RequestKey, ResponseEntity
from offline_cache.exceptions import InstallError, LifecycleError, NetworkError, OfflineCacheError
from offline_cache.protocols import CacheStorage, Fetcher
from offline_cache.repositories import HttpxFetcher, MemoryCacheStorage, RedisCacheStorage
from offline_cache.services import CacheStoreManager, CacheWorker, LifecycleController, RequestRouter

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    "get_redis_client",
    # Protocols (interfaces)
    "CacheStorage",
    "Fetcher",
    # Services (business logic)
    "CacheWorker",
    "CacheStoreManager",
    "RequestRouter",
    "LifecycleController",
    # Repositories (data access)
    "MemoryCacheStorage",
    "RedisCacheStorage",
    "HttpxFetcher",
    # Entities (domain models)
    "RequestEntity",
    "RequestKey",
    "ResponseEntity",
    # Errors
    "OfflineCacheError",
    "NetworkError",
    "InstallError",
    "LifecycleError",
]
