"""Cache key domain entity."""

from dataclasses import dataclass
from urllib.parse import urlsplit, urlunsplit

from .request import RequestEntity

DEFAULT_PORTS = {"http": 80, "https": 443}


def normalize_url(url: str) -> str:
    """Normalize a URL for use as a cache key.

    Lower-cases scheme and host, drops default ports, user info and the
    fragment, and turns an empty path into "/". The query string is kept
    verbatim.
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    if ":" in host:
        host = f"[{host}]"

    port = parts.port
    if port is None or DEFAULT_PORTS.get(scheme) == port:
        netloc = host
    else:
        netloc = f"{host}:{port}"

    return urlunsplit((scheme, netloc, parts.path or "/", parts.query, ""))


@dataclass(frozen=True)
class RequestKey:
    """Explicit (method, normalized URL) cache key.

    Two requests address the same cache entry if and only if their keys are
    equal. Request headers do not take part in the key.
    """

    method: str
    url: str

    @classmethod
    def from_request(cls, request: RequestEntity) -> "RequestKey":
        return cls(method=request.method.upper(), url=normalize_url(request.url))

    def as_string(self) -> str:
        """Storage field name, e.g. "GET https://example.com/api/customers"."""
        return f"{self.method} {self.url}"

    @classmethod
    def parse(cls, value: str) -> "RequestKey":
        method, _, url = value.partition(" ")
        return cls(method=method, url=url)
