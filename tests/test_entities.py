"""Tests for request keys and response snapshots."""

from offline_cache.entities import RequestEntity, RequestKey, ResponseEntity, normalize_url


def test_normalize_url_lowercases_scheme_and_host() -> None:
    assert normalize_url("HTTP://Shop.Test/API/Customers") == "http://shop.test/API/Customers"


def test_normalize_url_drops_default_port_and_fragment() -> None:
    assert normalize_url("https://shop.test:443/a?x=1#top") == "https://shop.test/a?x=1"
    assert normalize_url("http://shop.test:80/") == "http://shop.test/"


def test_normalize_url_keeps_custom_port_and_query_order() -> None:
    assert normalize_url("http://shop.test:3000/api?b=2&a=1") == "http://shop.test:3000/api?b=2&a=1"


def test_normalize_url_empty_path_becomes_root() -> None:
    assert normalize_url("http://shop.test") == "http://shop.test/"


def test_request_key_equality_ignores_headers() -> None:
    a = RequestEntity(method="get", url="http://SHOP.test/api/customers", headers=(("accept", "a"),))
    b = RequestEntity(method="GET", url="http://shop.test/api/customers#x", headers=(("accept", "b"),))
    assert RequestKey.from_request(a) == RequestKey.from_request(b)


def test_request_key_distinguishes_method_and_query() -> None:
    base = RequestKey.from_request(RequestEntity("GET", "http://shop.test/api/jobs?page=1"))
    assert base != RequestKey.from_request(RequestEntity("GET", "http://shop.test/api/jobs?page=2"))
    assert base != RequestKey.from_request(RequestEntity("HEAD", "http://shop.test/api/jobs?page=1"))


def test_request_key_string_round_trip() -> None:
    key = RequestKey.from_request(RequestEntity("GET", "http://shop.test/api/customers?q=a b"))
    assert RequestKey.parse(key.as_string()) == key


def test_for_path_resolves_against_origin() -> None:
    request = RequestEntity.for_path("http://shop.test", "/api/customers?active=1")
    assert request.url == "http://shop.test/api/customers?active=1"
    assert request.path == "/api/customers"
    assert request.is_get


def test_for_path_keeps_origin_base_path() -> None:
    request = RequestEntity.for_path("http://shop.test/app/", "/manifest.json")
    assert request.url == "http://shop.test/app/manifest.json"


def test_offline_sentinel_shape() -> None:
    sentinel = ResponseEntity.offline()
    assert sentinel.status == 503
    assert sentinel.body == b"Offline"
    assert sentinel.headers == ()
    assert sentinel.is_offline_sentinel
    assert not sentinel.is_cacheable


def test_cacheable_only_for_complete_success() -> None:
    assert ResponseEntity(status=200).is_cacheable
    assert ResponseEntity(status=204).is_cacheable
    assert not ResponseEntity(status=206).is_cacheable
    assert not ResponseEntity(status=304).is_cacheable
    assert not ResponseEntity(status=404).is_cacheable
    assert not ResponseEntity(status=500).is_cacheable


def test_clone_is_equal_but_independent() -> None:
    original = ResponseEntity(status=200, headers=(("content-type", "text/plain"),), body=b"hi")
    copy = original.clone()
    assert copy == original
    assert copy is not original


def test_header_lookup_is_case_insensitive() -> None:
    response = ResponseEntity(status=200, headers=(("Content-Type", "text/css"),))
    assert response.header("content-type") == "text/css"
    assert response.header("etag") is None


def test_for_storage_drops_cookie_headers() -> None:
    response = ResponseEntity(
        status=200,
        headers=(("Content-Type", "text/html"), ("Set-Cookie", "session=a"), ("set-cookie2", "legacy=1")),
        body=b"<html></html>",
    )
    stored = response.for_storage()
    assert stored.headers == (("Content-Type", "text/html"),)
    assert stored.body == response.body
    assert response.header("set-cookie") == "session=a"
