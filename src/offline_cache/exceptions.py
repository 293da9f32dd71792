"""Domain exceptions.

Repositories translate library errors into these so that services and
handlers never depend on httpx or redis exception types.
"""


class OfflineCacheError(Exception):
    """Base exception for the caching layer."""


class NetworkError(OfflineCacheError):
    """The upstream could not be reached (connection refused, DNS, timeout...)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Network request to {url} failed: {reason}")
        self.url = url
        self.reason = reason


class InstallError(OfflineCacheError):
    """Pre-warming the core partition failed; nothing was stored."""

    def __init__(self, failed_urls: list[str]) -> None:
        super().__init__(f"Failed to pre-cache core assets: {', '.join(failed_urls)}")
        self.failed_urls = failed_urls


class LifecycleError(OfflineCacheError):
    """A lifecycle transition was requested from a state that does not allow it."""

    def __init__(self, action: str, state: str) -> None:
        super().__init__(f"Cannot {action} while worker is {state}")
        self.action = action
        self.state = state
