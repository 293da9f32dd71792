"""Tests for partition naming, storage and pruning."""

import pytest
from conftest import get, post

from offline_cache.entities import PartitionKind, ResponseEntity
from offline_cache.services import CacheStoreManager, PartitionSet


def test_partition_names_are_versioned() -> None:
    partitions = PartitionSet(prefix="jkdp", version="v1")
    assert partitions.core == "jkdp-core-v1"
    assert partitions.assets == "jkdp-assets-v1"
    assert partitions.api == "jkdp-api-v1"
    assert partitions.names() == {"jkdp-core-v1", "jkdp-assets-v1", "jkdp-api-v1"}


@pytest.mark.asyncio
async def test_open_partition_creates_it(manager, storage) -> None:
    partition = await manager.open_partition("jkdp-api-v1")
    assert partition.name == "jkdp-api-v1"
    assert "jkdp-api-v1" in await storage.keys()
    assert await partition.count() == 0


@pytest.mark.asyncio
async def test_get_returns_none_when_absent(manager) -> None:
    partition = await manager.open_kind(PartitionKind.API)
    assert await manager.get(partition, get("/api/customers")) is None


@pytest.mark.asyncio
async def test_put_twice_keeps_single_entry_last_value_wins(manager) -> None:
    partition = await manager.open_kind(PartitionKind.API)
    request = get("/api/customers")
    first = ResponseEntity(status=200, body=b'{"data": [1]}')
    second = ResponseEntity(status=200, body=b'{"data": [1, 2]}')

    await manager.put(partition, request, first)
    await manager.put(partition, request, first)
    assert await partition.count() == 1
    assert await manager.get(partition, request) == first

    await manager.put(partition, request, second)
    assert await partition.count() == 1
    assert await manager.get(partition, request) == second


@pytest.mark.asyncio
async def test_put_rejects_non_get(manager) -> None:
    partition = await manager.open_kind(PartitionKind.API)
    with pytest.raises(ValueError):
        await manager.put(partition, post("/api/payments"), ResponseEntity(status=200))
    assert await partition.count() == 0


@pytest.mark.asyncio
async def test_partitions_are_isolated(manager) -> None:
    api = await manager.open_kind(PartitionKind.API)
    core = await manager.open_kind(PartitionKind.CORE)
    await api.put(get("/api/jobs"), ResponseEntity(status=200, body=b"jobs"))
    assert await core.match(get("/api/jobs")) is None


@pytest.mark.asyncio
async def test_prune_deletes_only_stale_partitions(storage) -> None:
    old = CacheStoreManager.create(storage=storage, prefix="jkdp", version="v1")
    for kind in PartitionKind:
        partition = await old.open_kind(kind)
        await partition.put(get(f"/{kind.value}"), ResponseEntity(status=200, body=b"old"))
    await storage.open("unrelated-cache")

    new = CacheStoreManager.create(storage=storage, prefix="jkdp", version="v2")
    for kind in PartitionKind:
        await new.open_kind(kind)

    deleted = await new.prune_stale_partitions()

    assert set(deleted) == {"jkdp-core-v1", "jkdp-assets-v1", "jkdp-api-v1", "unrelated-cache"}
    assert set(await storage.keys()) == {"jkdp-core-v2", "jkdp-assets-v2", "jkdp-api-v2"}
    assert await new.get_stats() == {"jkdp-core-v2": 0, "jkdp-assets-v2": 0, "jkdp-api-v2": 0}


@pytest.mark.asyncio
async def test_prune_with_explicit_names(manager, storage) -> None:
    await storage.open("a")
    await storage.open("b")
    assert await manager.prune_stale_partitions({"a"}) == ["b"]
    assert await storage.keys() == ["a"]


@pytest.mark.asyncio
async def test_put_does_not_store_cookie_headers(manager) -> None:
    partition = await manager.open_kind(PartitionKind.CORE)
    response = ResponseEntity(
        status=200,
        headers=(("content-type", "text/html"), ("set-cookie", "session=alice-token; HttpOnly")),
        body=b"<html>dashboard</html>",
    )

    await partition.put(get("/dashboard"), response)

    stored = await partition.match(get("/dashboard"))
    assert stored.header("set-cookie") is None
    assert stored.header("content-type") == "text/html"
    assert stored.body == b"<html>dashboard</html>"
