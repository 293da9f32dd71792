"""httpx-based implementation of Fetcher.

Performs the real upstream request for every strategy and for
pass-through traffic. No retries and, unless configured, no timeout:
a single failed attempt surfaces immediately as NetworkError so the
calling strategy can fall back.
"""

from urllib.parse import urlsplit, urlunsplit

import httpx

from offline_cache.config import settings
from offline_cache.entities import RequestEntity, ResponseEntity
from offline_cache.exceptions import NetworkError

# Never forwarded in either direction
HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "trailers",
        "transfer-encoding",
        "upgrade",
    }
)
# Recomputed by httpx (request) or invalid after decoding (response)
_REQUEST_SKIP = HOP_BY_HOP_HEADERS | {"host", "content-length"}
_RESPONSE_SKIP = HOP_BY_HOP_HEADERS | {"content-length", "content-encoding"}


def relative_location(location: str, request_url: str) -> str:
    """Turn a redirect back to the upstream origin into a path on the proxy.

    Redirects to any other origin are returned unchanged.
    """
    target = urlsplit(location)
    origin = urlsplit(request_url)
    if not target.netloc:
        return location
    same_origin = (target.scheme or origin.scheme).lower() == origin.scheme.lower() and (
        target.netloc.lower() == origin.netloc.lower()
    )
    if not same_origin:
        return location
    return urlunsplit(("", "", target.path or "/", target.query, target.fragment))


class HttpxFetcher:
    """httpx implementation of the Fetcher protocol.

    This class satisfies the Fetcher protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        fetcher = HttpxFetcher.create()
        response = await fetcher.fetch(
            RequestEntity.for_path("http://localhost:3000", "/api/customers")
        )
        ```
    """

    def __init__(
        self,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds. None disables the timeout.
            client: Pre-built client (e.g. with a MockTransport). If None,
                one is created lazily.
        """
        self._timeout = timeout
        self._client = client

    @classmethod
    def create(cls, timeout: float | None = None) -> "HttpxFetcher":
        """Factory method to create HttpxFetcher with defaults.

        Args:
            timeout: Request timeout. If None, uses settings.

        Returns:
            Configured HttpxFetcher
        """
        return cls(timeout=timeout if timeout is not None else settings.fetch_timeout)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=False,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    async def fetch(self, request: RequestEntity) -> ResponseEntity:
        """Send the request upstream.

        Args:
            request: The intercepted request

        Returns:
            The fully read response, whatever its status

        Raises:
            NetworkError: If the upstream could not be reached
        """
        headers = [(k, v) for k, v in request.headers if k.lower() not in _REQUEST_SKIP]

        try:
            response = await self.client.request(
                request.method,
                request.url,
                headers=headers,
                content=request.body or None,
            )
        except httpx.TransportError as e:
            raise NetworkError(request.url, str(e) or type(e).__name__) from e

        return ResponseEntity(
            status=response.status_code,
            headers=tuple(
                (k, relative_location(v, request.url) if k.lower() == "location" else v)
                for k, v in response.headers.multi_items()
                if k.lower() not in _RESPONSE_SKIP
            ),
            body=response.content,
        )

    async def close(self) -> None:
        """Close the async HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
