"""Shared fixtures: a scripted upstream and in-memory partitions."""

import asyncio

import pytest

from offline_cache.config import Settings
from offline_cache.entities import RequestEntity, ResponseEntity
from offline_cache.exceptions import NetworkError
from offline_cache.repositories import MemoryCacheStorage
from offline_cache.services import CacheStoreManager

ORIGIN = "http://shop.test"


class FakeFetcher:
    """Scripted Fetcher: serves canned responses, can go offline or block."""

    def __init__(self, responses: dict[str, ResponseEntity] | None = None) -> None:
        self.responses = dict(responses or {})
        self.online = True
        self.calls: list[RequestEntity] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    def serve(self, path: str, body: bytes, status: int = 200, headers=()) -> None:
        self.responses[ORIGIN + path] = ResponseEntity(status=status, headers=tuple(headers), body=body)

    def calls_for(self, path: str) -> int:
        return sum(1 for r in self.calls if r.url == ORIGIN + path)

    async def fetch(self, request: RequestEntity) -> ResponseEntity:
        self.calls.append(request)
        if self.gate is not None:
            await self.gate.wait()
        if not self.online:
            raise NetworkError(request.url, "offline")
        response = self.responses.get(request.url)
        if response is None:
            return ResponseEntity(status=404, body=b"Not Found")
        return response

    async def close(self) -> None:
        self.closed = True


def get(path: str, destination: str = "") -> RequestEntity:
    return RequestEntity.for_path(ORIGIN, path, destination=destination)


def post(path: str, body: bytes = b"{}") -> RequestEntity:
    return RequestEntity.for_path(ORIGIN, path, method="POST", body=body)


def make_settings(**overrides) -> Settings:
    values = {
        "upstream_url": ORIGIN,
        "cache_prefix": "jkdp",
        "cache_version": "v1",
        "core_assets": ("/", "/manifest.json", "/JK_Logo.jpg"),
        "api_prefix": "/api/",
        "bundle_prefix": "/_next/",
        "cache_backend": "memory",
        "skip_waiting_on_install": True,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def fetcher() -> FakeFetcher:
    fake = FakeFetcher()
    fake.serve("/", b"<html>shell</html>", headers=[("content-type", "text/html")])
    fake.serve("/manifest.json", b'{"name": "JKDP"}', headers=[("content-type", "application/json")])
    fake.serve("/JK_Logo.jpg", b"\xff\xd8\xff\xe0logo", headers=[("content-type", "image/jpeg")])
    return fake


@pytest.fixture
def storage() -> MemoryCacheStorage:
    return MemoryCacheStorage()


@pytest.fixture
def manager(storage: MemoryCacheStorage) -> CacheStoreManager:
    return CacheStoreManager.create(storage=storage, prefix="jkdp", version="v1")
