"""Repository layer for data access.

This layer hides external dependencies (Redis, the upstream network)
behind protocol-based interfaces. The repositories are protocol-based
(structural typing), not inheritance-based.
"""

from offline_cache.protocols import CacheStorage, Fetcher

from .httpx_fetcher import HttpxFetcher
from .memory_storage import MemoryCacheStorage
from .redis_storage import RedisCacheStorage

__all__ = [
    "CacheStorage",
    "Fetcher",
    "HttpxFetcher",
    "MemoryCacheStorage",
    "RedisCacheStorage",
]
