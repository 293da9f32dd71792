#!/usr/bin/env python3
"""
Demo script for the offline cache.

Runs the cache worker against a scripted print-shop origin and shows how
each class of request behaves when the network goes away.
"""

import asyncio

import httpx

from offline_cache.config import Settings
from offline_cache.entities import RequestEntity
from offline_cache.exceptions import NetworkError
from offline_cache.repositories import HttpxFetcher, MemoryCacheStorage
from offline_cache.services import CacheWorker

ORIGIN = "http://printshop.local"


class DemoOrigin:
    """Scripted origin that can be switched off."""

    def __init__(self) -> None:
        self.online = True
        self.chunk_version = 1

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if not self.online:
            raise httpx.ConnectError("network unreachable", request=request)

        path = request.url.path
        if path == "/":
            return httpx.Response(200, html="<html>JK Digital Print</html>")
        if path == "/manifest.json":
            return httpx.Response(200, json={"name": "JK Digital Print", "start_url": "/"})
        if path == "/JK_Logo.jpg":
            return httpx.Response(200, content=b"\xff\xd8logo", headers={"content-type": "image/jpeg"})
        if path == "/api/customers":
            return httpx.Response(200, json={"data": [{"id": 1, "name": "Acme Signs"}]})
        if path == "/api/payments" and request.method == "POST":
            return httpx.Response(201, json={"id": 42, "status": "recorded"})
        if path.startswith("/_next/static/"):
            body = f"console.log('build {self.chunk_version}')"
            return httpx.Response(200, text=body, headers={"content-type": "application/javascript"})
        return httpx.Response(404, text="Not Found")


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def describe(label: str, status: int, body: bytes) -> None:
    print(f"  {label:<38} -> {status} {body[:48].decode(errors='replace')}")


async def show(worker: CacheWorker, label: str, request: RequestEntity) -> None:
    try:
        response = await worker.handle_fetch(request)
    except NetworkError as e:
        print(f"  {label:<38} -> network error ({e.reason})")
        return
    describe(label, response.status, response.body)


async def main() -> None:
    origin = DemoOrigin()
    config = Settings(upstream_url=ORIGIN, cache_backend="memory", cache_version="v1")
    worker = CacheWorker.create(
        storage=MemoryCacheStorage(),
        fetcher=HttpxFetcher(client=httpx.AsyncClient(transport=httpx.MockTransport(origin))),
        config=config,
    )

    print_section("Install and activate")
    await worker.install()
    status = await worker.status()
    print(f"  State: {status['state']}, partitions: {status['partitions']}")

    def get(path: str, destination: str = "") -> RequestEntity:
        return RequestEntity.for_path(ORIGIN, path, destination=destination)

    print_section("Online")
    await show(worker, "GET /api/customers (network-first)", get("/api/customers"))
    await show(worker, "GET /_next/static/app.js (revalidate)", get("/_next/static/app.js", "script"))
    await show(worker, "GET / (cache-first)", get("/", "document"))
    await show(
        worker,
        "POST /api/payments (pass-through)",
        RequestEntity.for_path(ORIGIN, "/api/payments", method="POST", body=b'{"amount": 1200}'),
    )
    await worker.drain()

    print_section("New build deployed: stale first, fresh next time")
    origin.chunk_version = 2
    await show(worker, "GET /_next/static/app.js (1st)", get("/_next/static/app.js", "script"))
    await worker.drain()
    await show(worker, "GET /_next/static/app.js (2nd)", get("/_next/static/app.js", "script"))
    await worker.drain()

    print_section("Offline")
    origin.online = False
    await show(worker, "GET /api/customers (cached)", get("/api/customers"))
    await show(worker, "GET /api/invoices (never cached)", get("/api/invoices"))
    await show(worker, "GET / (pre-cached shell)", get("/", "document"))
    await show(worker, "GET /jobs/new (never cached)", get("/jobs/new", "document"))
    await show(
        worker,
        "POST /api/payments (pass-through)",
        RequestEntity.for_path(ORIGIN, "/api/payments", method="POST", body=b"{}"),
    )

    print_section("Final status")
    status = await worker.status()
    for name, count in status["partitions"].items():
        print(f"  {name:<20} {count} entries")

    await worker.close()


if __name__ == "__main__":
    asyncio.run(main())
