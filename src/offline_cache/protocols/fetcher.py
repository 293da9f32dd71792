"""Network fetcher protocol.

Defines the interface for whatever performs the real network request
on behalf of the caching layer.
"""

from typing import Protocol, runtime_checkable

from offline_cache.entities import RequestEntity, ResponseEntity


@runtime_checkable
class Fetcher(Protocol):
    """Protocol for network fetchers.

    Example:
        ```python
        from offline_cache.protocols import Fetcher

        fetcher: Fetcher = HttpxFetcher.create()
        ```
    """

    async def fetch(self, request: RequestEntity) -> ResponseEntity:
        """Send the request to the network.

        Any HTTP status (including 4xx/5xx) is a successful fetch.

        Args:
            request: The request to send

        Returns:
            The fully read response

        Raises:
            NetworkError: If no response could be obtained at all
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...
