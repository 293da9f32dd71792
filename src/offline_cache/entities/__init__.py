"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.

Entities should have:
- No JSON serialization logic
- No Pydantic validation
- No external dependencies
- Pure domain logic only
"""

from .request import RequestEntity
from .request_key import RequestKey, normalize_url
from .response import ResponseEntity
from .route import PartitionKind, Route, StrategyKind

__all__ = [
    "RequestEntity",
    "RequestKey",
    "ResponseEntity",
    "Route",
    "StrategyKind",
    "PartitionKind",
    "normalize_url",
]
