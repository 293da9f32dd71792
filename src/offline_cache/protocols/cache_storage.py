"""Cache storage protocol.

Defines the interface for any backend that can hold named cache
partitions of request -> response snapshots.

Implementations can include:
- In-process dictionaries (default)
- Redis
- Any other key-value store with atomic per-entry writes
"""

from typing import Protocol, runtime_checkable

from offline_cache.entities import RequestKey, ResponseEntity


@runtime_checkable
class CacheStorage(Protocol):
    """Protocol for partitioned cache storage backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.

    Example:
        ```python
        from offline_cache.protocols import CacheStorage

        storage: CacheStorage = MemoryCacheStorage()
        storage: CacheStorage = RedisCacheStorage.create()
        ```
    """

    async def open(self, name: str) -> None:
        """Create the named partition if it does not exist yet.

        Args:
            name: Concrete partition name (e.g. "jkdp-api-v1")
        """
        ...

    async def keys(self) -> list[str]:
        """List the names of all existing partitions.

        Returns:
            Partition names
        """
        ...

    async def delete(self, name: str) -> bool:
        """Delete a whole partition and every entry in it.

        Args:
            name: Partition name

        Returns:
            True if the partition existed, False otherwise
        """
        ...

    async def match(self, name: str, key: RequestKey) -> ResponseEntity | None:
        """Look up a stored response.

        Args:
            name: Partition name
            key: The request key

        Returns:
            The stored response, or None if absent
        """
        ...

    async def put(self, name: str, key: RequestKey, response: ResponseEntity) -> None:
        """Store a response snapshot, overwriting any previous entry.

        Creates the partition if it does not exist.

        Args:
            name: Partition name
            key: The request key
            response: The response snapshot to store
        """
        ...

    async def count(self, name: str) -> int:
        """Count the entries of a partition.

        Returns:
            Number of entries (0 for unknown partitions)
        """
        ...

    async def health_check(self) -> bool:
        """Check if the backend is accessible.

        Returns:
            True if healthy, False otherwise
        """
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...
