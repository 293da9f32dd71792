"""Tests for request classification."""

import pytest
from conftest import ORIGIN, get

from offline_cache.entities import PartitionKind, RequestEntity, Route, StrategyKind
from offline_cache.services import RequestRouter

NETWORK_FIRST = Route(StrategyKind.NETWORK_FIRST, PartitionKind.API)
REVALIDATE = Route(StrategyKind.STALE_WHILE_REVALIDATE, PartitionKind.ASSETS)
CACHE_FIRST = Route(StrategyKind.CACHE_FIRST, PartitionKind.CORE)


@pytest.fixture
def router() -> RequestRouter:
    return RequestRouter(api_prefix="/api/", bundle_prefix="/_next/")


@pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"])
def test_non_get_is_not_intercepted(router, method) -> None:
    request = RequestEntity.for_path(ORIGIN, "/api/payments", method=method)
    assert router.route(request) is None


def test_non_get_asset_is_not_intercepted(router) -> None:
    request = RequestEntity.for_path(ORIGIN, "/_next/static/chunk.js", method="POST", destination="script")
    assert router.route(request) is None


def test_api_paths_use_network_first(router) -> None:
    assert router.route(get("/api/customers")) == NETWORK_FIRST
    assert router.route(get("/api/invoices/42?expand=items")) == NETWORK_FIRST


def test_api_prefix_wins_over_destination(router) -> None:
    assert router.route(get("/api/invoices/42/pdf", destination="image")) == NETWORK_FIRST


@pytest.mark.parametrize("destination", ["image", "style", "script", "Script"])
def test_asset_destinations_use_stale_while_revalidate(router, destination) -> None:
    assert router.route(get("/JK_Logo.jpg", destination=destination)) == REVALIDATE


def test_bundle_paths_use_stale_while_revalidate(router) -> None:
    assert router.route(get("/_next/static/chunk123.js")) == REVALIDATE
    assert router.route(get("/_next/image?url=%2Flogo.png&w=64")) == REVALIDATE


@pytest.mark.parametrize("path,destination", [
    ("/", "document"),
    ("/dashboard", "document"),
    ("/manifest.json", "manifest"),
    ("/apiary", ""),
    ("/robots.txt", ""),
])
def test_everything_else_uses_cache_first(router, path, destination) -> None:
    assert router.route(get(path, destination=destination)) == CACHE_FIRST


def test_routing_is_deterministic(router) -> None:
    request = get("/_next/static/app.css", destination="style")
    assert {router.route(request) for _ in range(5)} == {REVALIDATE}


def test_custom_prefixes() -> None:
    router = RequestRouter(api_prefix="/rest/", bundle_prefix="/static/")
    assert router.route(get("/rest/jobs")) == NETWORK_FIRST
    assert router.route(get("/static/app.js")) == REVALIDATE
    assert router.route(get("/api/jobs")) == CACHE_FIRST
