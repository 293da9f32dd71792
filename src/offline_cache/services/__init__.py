"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> CacheWorker -> Router -> Strategy -> CacheStoreManager -> CacheStorage
    (HTTP)     (events)                              (partitions)         (data access)
"""

from .cache_store_manager import CachePartition, CacheStoreManager, PartitionSet
from .events import EventSource
from .lifecycle import SKIP_WAITING, LifecycleController, WorkerState
from .router import RequestRouter
from .strategies import CacheFirst, FetchStrategy, NetworkFirst, StaleWhileRevalidate
from .worker import CacheWorker

__all__ = [
    "CacheWorker",
    "CacheStoreManager",
    "CachePartition",
    "PartitionSet",
    "EventSource",
    "LifecycleController",
    "WorkerState",
    "SKIP_WAITING",
    "RequestRouter",
    "FetchStrategy",
    "NetworkFirst",
    "CacheFirst",
    "StaleWhileRevalidate",
]
