"""Redis implementation of CacheStorage.

Layout:
    <namespace>:partitions              set of partition names
    <namespace>:partition:<name>        hash, field = key string, value = JSON snapshot

Partitions are shared by every process pointed at the same Redis and
namespace. Writes are last-write-wins per field.
"""

import base64
import json
import logging

import redis.asyncio as redis

from offline_cache.config import Settings, get_redis_client, settings
from offline_cache.entities import RequestKey, ResponseEntity

logger = logging.getLogger(__name__)


def encode_response(response: ResponseEntity) -> bytes:
    """Serialize a response snapshot for storage."""
    return json.dumps(
        {
            "status": response.status,
            "headers": [list(pair) for pair in response.headers],
            "body": base64.b64encode(response.body).decode("ascii"),
        }
    ).encode()


def decode_response(raw: bytes | str) -> ResponseEntity:
    """Deserialize a stored response snapshot."""
    data = json.loads(raw)
    return ResponseEntity(
        status=int(data["status"]),
        headers=tuple((str(name), str(value)) for name, value in data.get("headers", [])),
        body=base64.b64decode(data.get("body", "")),
    )


class RedisCacheStorage:
    """Redis implementation using one hash per partition.

    This class satisfies the CacheStorage protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        namespace: str | None = None,
    ) -> None:
        """Initialize the Redis cache storage.

        Args:
            redis_client: asyncio Redis client. If None, creates default.
            namespace: Key prefix for all partitions. Defaults to settings.
        """
        self._client = redis_client or get_redis_client()
        self._namespace = namespace or settings.redis_namespace

    @classmethod
    def create(
        cls,
        config: Settings | None = None,
        namespace: str | None = None,
    ) -> "RedisCacheStorage":
        """Factory method to create RedisCacheStorage with defaults.

        Args:
            config: Settings to read the connection from. If None, uses settings.
            namespace: Key prefix. If None, uses settings.

        Returns:
            Configured RedisCacheStorage
        """
        config = config or settings
        return cls(
            redis_client=get_redis_client(config),
            namespace=namespace or config.redis_namespace,
        )

    @property
    def _registry_key(self) -> str:
        return f"{self._namespace}:partitions"

    def _partition_key(self, name: str) -> str:
        return f"{self._namespace}:partition:{name}"

    async def open(self, name: str) -> None:
        # A Redis hash cannot be empty, so an opened partition exists only in the registry
        await self._client.sadd(self._registry_key, name)

    async def keys(self) -> list[str]:
        members = await self._client.smembers(self._registry_key)
        names = [m.decode() if isinstance(m, bytes) else str(m) for m in members]
        return sorted(names)

    async def delete(self, name: str) -> bool:
        pipe = self._client.pipeline()
        pipe.srem(self._registry_key, name)
        pipe.delete(self._partition_key(name))
        removed, _ = await pipe.execute()
        if removed:
            logger.debug("Deleted partition %s", name)
        return bool(removed)

    async def match(self, name: str, key: RequestKey) -> ResponseEntity | None:
        raw = await self._client.hget(self._partition_key(name), key.as_string())
        if raw is None:
            return None
        try:
            return decode_response(raw)
        except (ValueError, KeyError, TypeError):
            logger.warning("Discarding unreadable entry %s in partition %s", key.as_string(), name)
            return None

    async def put(self, name: str, key: RequestKey, response: ResponseEntity) -> None:
        pipe = self._client.pipeline()
        pipe.sadd(self._registry_key, name)
        pipe.hset(self._partition_key(name), key.as_string(), encode_response(response))
        await pipe.execute()

    async def count(self, name: str) -> int:
        return int(await self._client.hlen(self._partition_key(name)))

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except redis.RedisError:
            return False

    async def close(self) -> None:
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
