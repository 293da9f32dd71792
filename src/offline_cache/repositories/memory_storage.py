"""In-process implementation of CacheStorage.

The default backend. Partitions live for the lifetime of the process,
which matches a single long-lived worker instance.
"""

from offline_cache.entities import RequestKey, ResponseEntity


class MemoryCacheStorage:
    """Dictionary-backed partitions.

    This class satisfies the CacheStorage protocol through structural
    typing - no explicit inheritance needed.

    Every operation is a single dictionary access with no await inside,
    so each one is atomic with respect to other coroutines.
    """

    def __init__(self) -> None:
        self._partitions: dict[str, dict[RequestKey, ResponseEntity]] = {}

    @classmethod
    def create(cls) -> "MemoryCacheStorage":
        return cls()

    async def open(self, name: str) -> None:
        self._partitions.setdefault(name, {})

    async def keys(self) -> list[str]:
        return list(self._partitions)

    async def delete(self, name: str) -> bool:
        return self._partitions.pop(name, None) is not None

    async def match(self, name: str, key: RequestKey) -> ResponseEntity | None:
        partition = self._partitions.get(name)
        if partition is None:
            return None
        return partition.get(key)

    async def put(self, name: str, key: RequestKey, response: ResponseEntity) -> None:
        self._partitions.setdefault(name, {})[key] = response

    async def count(self, name: str) -> int:
        return len(self._partitions.get(name, {}))

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self._partitions.clear()
