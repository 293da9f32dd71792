"""Cache store manager.

Owns the three versioned partitions and their lifecycle: opening,
reading, writing and pruning partitions left behind by a previous
version.
"""

import logging
from dataclasses import dataclass

from offline_cache.config import settings
from offline_cache.entities import PartitionKind, RequestEntity, RequestKey, ResponseEntity
from offline_cache.protocols import CacheStorage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PartitionSet:
    """Concrete partition names for one cache version."""

    prefix: str
    version: str

    def name_for(self, kind: PartitionKind) -> str:
        return f"{self.prefix}-{kind.value}-{self.version}"

    @property
    def core(self) -> str:
        return self.name_for(PartitionKind.CORE)

    @property
    def assets(self) -> str:
        return self.name_for(PartitionKind.ASSETS)

    @property
    def api(self) -> str:
        return self.name_for(PartitionKind.API)

    def names(self) -> frozenset[str]:
        return frozenset(self.name_for(kind) for kind in PartitionKind)


class CachePartition:
    """Handle on one named partition."""

    def __init__(self, storage: CacheStorage, name: str) -> None:
        self._storage = storage
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    async def match(self, request: RequestEntity) -> ResponseEntity | None:
        return await self._storage.match(self._name, RequestKey.from_request(request))

    async def put(self, request: RequestEntity, response: ResponseEntity) -> None:
        """Store a response for request, replacing any previous entry.

        Cookie-setting headers are not stored.

        Raises:
            ValueError: If request is not a GET
        """
        if not request.is_get:
            raise ValueError(f"Only GET requests can be cached, got {request.method}")
        await self._storage.put(self._name, RequestKey.from_request(request), response.for_storage())

    async def count(self) -> int:
        return await self._storage.count(self._name)

    def __repr__(self) -> str:
        return f"CachePartition({self._name!r})"


class CacheStoreManager:
    """Addresses the core/assets/api partitions of the current version.

    Depends on the CacheStorage protocol only, so the same manager runs
    against in-process dictionaries or Redis.

    Example:
        ```python
        manager = CacheStoreManager.create(storage=MemoryCacheStorage())
        api = await manager.open_partition(manager.partitions.api)
        await manager.put(api, request, response)
        ```
    """

    def __init__(self, storage: CacheStorage, partitions: PartitionSet) -> None:
        self._storage = storage
        self._partitions = partitions

    @classmethod
    def create(
        cls,
        storage: CacheStorage,
        prefix: str | None = None,
        version: str | None = None,
    ) -> "CacheStoreManager":
        """Factory method using the configured prefix and version.

        Args:
            storage: Storage backend (required).
            prefix: Partition name prefix. If None, uses settings.
            version: Cache version suffix. If None, uses settings.

        Returns:
            Configured CacheStoreManager
        """
        return cls(
            storage=storage,
            partitions=PartitionSet(
                prefix=prefix or settings.cache_prefix,
                version=version or settings.cache_version,
            ),
        )

    @property
    def partitions(self) -> PartitionSet:
        return self._partitions

    @property
    def storage(self) -> CacheStorage:
        """Get the underlying storage (for testing)."""
        return self._storage

    async def open_partition(self, name: str) -> CachePartition:
        """Open the named partition, creating it if absent."""
        await self._storage.open(name)
        return CachePartition(self._storage, name)

    async def open_kind(self, kind: PartitionKind) -> CachePartition:
        return await self.open_partition(self._partitions.name_for(kind))

    async def get(self, partition: CachePartition, request: RequestEntity) -> ResponseEntity | None:
        return await partition.match(request)

    async def put(
        self,
        partition: CachePartition,
        request: RequestEntity,
        response: ResponseEntity,
    ) -> None:
        await partition.put(request, response)

    async def prune_stale_partitions(self, current_names: set[str] | frozenset[str] | None = None) -> list[str]:
        """Delete every partition whose name is not in current_names.

        Args:
            current_names: Names to keep. Defaults to this version's partitions.

        Returns:
            Names of the deleted partitions
        """
        keep = self._partitions.names() if current_names is None else frozenset(current_names)
        deleted = []
        for name in await self._storage.keys():
            if name in keep:
                continue
            if await self._storage.delete(name):
                deleted.append(name)
                logger.info("Pruned stale partition %s", name)
        return deleted

    async def get_stats(self) -> dict[str, int]:
        """Entry counts for the current version's partitions."""
        return {
            self._partitions.name_for(kind): await self._storage.count(self._partitions.name_for(kind))
            for kind in PartitionKind
        }
