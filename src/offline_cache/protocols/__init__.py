"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (memory -> Redis, httpx -> scripted)
- Unit testing with fake implementations
- Clear separation of concerns
"""

from .cache_storage import CacheStorage
from .fetcher import Fetcher

__all__ = [
    "CacheStorage",
    "Fetcher",
]
