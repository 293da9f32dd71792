"""Tests for the httpx fetcher against a MockTransport upstream."""

import httpx
import pytest
from conftest import ORIGIN, get

from offline_cache.entities import RequestEntity
from offline_cache.exceptions import NetworkError
from offline_cache.repositories import HttpxFetcher
from offline_cache.repositories.httpx_fetcher import relative_location


def fetcher_for(handler) -> HttpxFetcher:
    return HttpxFetcher(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_fetch_relays_status_headers_and_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            404,
            content=b"missing",
            headers=[("content-type", "text/plain"), ("set-cookie", "a=1"), ("set-cookie", "b=2")],
        )

    fetcher = fetcher_for(handler)
    response = await fetcher.fetch(get("/nope"))

    assert response.status == 404
    assert response.body == b"missing"
    assert [v for k, v in response.headers if k == "set-cookie"] == ["a=1", "b=2"]
    assert response.header("content-length") is None
    await fetcher.close()


@pytest.mark.asyncio
async def test_fetch_forwards_method_body_and_end_to_end_headers() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201)

    fetcher = fetcher_for(handler)
    request = RequestEntity.for_path(
        ORIGIN,
        "/api/payments",
        method="POST",
        headers=(("authorization", "Bearer t"), ("connection", "keep-alive"), ("host", "proxy.local")),
        body=b'{"amount": 5}',
    )

    await fetcher.fetch(request)

    sent = seen[0]
    assert sent.method == "POST"
    assert str(sent.url) == ORIGIN + "/api/payments"
    assert sent.content == b'{"amount": 5}'
    assert sent.headers["authorization"] == "Bearer t"
    assert sent.headers["host"] == "shop.test"
    await fetcher.close()


@pytest.mark.asyncio
async def test_transport_errors_become_network_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = fetcher_for(handler)
    with pytest.raises(NetworkError) as exc_info:
        await fetcher.fetch(get("/api/customers"))

    assert exc_info.value.url == ORIGIN + "/api/customers"
    assert "connection refused" in exc_info.value.reason
    await fetcher.close()


@pytest.mark.asyncio
async def test_close_is_idempotent() -> None:
    fetcher = HttpxFetcher(timeout=1.0)
    assert isinstance(fetcher.client, httpx.AsyncClient)
    await fetcher.close()
    await fetcher.close()


@pytest.mark.asyncio
async def test_redirect_to_upstream_origin_becomes_relative() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/old":
            return httpx.Response(302, headers={"location": ORIGIN + "/login?next=%2Fjobs"})
        return httpx.Response(301, headers={"location": "https://auth.example.com/sso"})

    fetcher = fetcher_for(handler)

    same_origin = await fetcher.fetch(get("/old"))
    other_origin = await fetcher.fetch(get("/sso"))

    assert same_origin.status == 302
    assert same_origin.header("location") == "/login?next=%2Fjobs"
    assert other_origin.header("location") == "https://auth.example.com/sso"
    await fetcher.close()


def test_relative_location_rules() -> None:
    assert relative_location("/already/relative", ORIGIN + "/x") == "/already/relative"
    assert relative_location("HTTP://SHOP.TEST", ORIGIN + "/x") == "/"
    assert relative_location("//shop.test/a#top", ORIGIN + "/x") == "/a#top"
    assert relative_location("https://shop.test/a", ORIGIN + "/x") == "https://shop.test/a"
    assert relative_location("http://shop.test:8080/a", ORIGIN + "/x") == "http://shop.test:8080/a"
