"""Response snapshot domain entity."""

import dataclasses
from dataclasses import dataclass

OFFLINE_STATUS = 503
OFFLINE_BODY = b"Offline"

# Per-client state; never replayed from a partition
UNSTORED_HEADERS = frozenset({"set-cookie", "set-cookie2"})


@dataclass(frozen=True)
class ResponseEntity:
    """Domain entity for a response relayed from the network or a partition.

    Attributes:
        status: HTTP status code
        headers: Response headers as (name, value) pairs
        body: Fully read response body
    """

    status: int
    headers: tuple[tuple[str, str], ...] = ()
    body: bytes = b""

    @classmethod
    def offline(cls) -> "ResponseEntity":
        """The offline sentinel: 503 with a plain "Offline" body and no headers."""
        return cls(status=OFFLINE_STATUS, headers=(), body=OFFLINE_BODY)

    @property
    def ok(self) -> bool:
        return 200 <= self.status <= 299

    @property
    def is_cacheable(self) -> bool:
        """Only complete successful responses may be stored."""
        return self.ok and self.status != 206

    @property
    def is_offline_sentinel(self) -> bool:
        return self.status == OFFLINE_STATUS and self.body == OFFLINE_BODY and not self.headers

    def header(self, name: str) -> str | None:
        """Return the first header value matching name (case-insensitive)."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None

    def clone(self) -> "ResponseEntity":
        """Return an independent snapshot."""
        return dataclasses.replace(self, headers=tuple(self.headers), body=bytes(self.body))

    def for_storage(self) -> "ResponseEntity":
        """Return a snapshot safe to store in a partition shared by all clients.

        Cookie-setting headers are dropped so that one client's session is
        never replayed to another.
        """
        return dataclasses.replace(
            self,
            headers=tuple((k, v) for k, v in self.headers if k.lower() not in UNSTORED_HEADERS),
            body=bytes(self.body),
        )
