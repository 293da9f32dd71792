"""Intercepted request domain entity."""

from dataclasses import dataclass
from urllib.parse import urljoin, urlsplit


@dataclass(frozen=True)
class RequestEntity:
    """Domain entity for a request intercepted from the page.

    Attributes:
        method: HTTP method as sent by the client
        url: Absolute upstream URL
        destination: Resource type reported by the browser (Sec-Fetch-Dest),
            e.g. "image", "style", "script", "document". Empty when unknown.
        headers: Request headers as (name, value) pairs
        body: Request body, empty for GET
    """

    method: str
    url: str
    destination: str = ""
    headers: tuple[tuple[str, str], ...] = ()
    body: bytes = b""

    @classmethod
    def for_path(
        cls,
        origin: str,
        path: str,
        method: str = "GET",
        destination: str = "",
        headers: tuple[tuple[str, str], ...] = (),
        body: bytes = b"",
    ) -> "RequestEntity":
        """Build a request for a site-relative path (with optional query) on origin."""
        return cls(
            method=method,
            url=urljoin(origin.rstrip("/") + "/", path.lstrip("/")),
            destination=destination,
            headers=headers,
            body=body,
        )

    @property
    def path(self) -> str:
        """URL path component (always starts with '/')."""
        return urlsplit(self.url).path or "/"

    @property
    def is_get(self) -> bool:
        return self.method.upper() == "GET"
