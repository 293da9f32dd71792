"""Routing decision domain entity."""

from dataclasses import dataclass
from enum import Enum


class StrategyKind(str, Enum):
    """Fetch strategies a GET request can be dispatched to."""

    NETWORK_FIRST = "network-first"
    CACHE_FIRST = "cache-first"
    STALE_WHILE_REVALIDATE = "stale-while-revalidate"


class PartitionKind(str, Enum):
    """Logical partition names; concrete names carry a prefix and version."""

    CORE = "core"
    ASSETS = "assets"
    API = "api"


@dataclass(frozen=True)
class Route:
    """The strategy and partition selected for an intercepted GET request."""

    strategy: StrategyKind
    partition: PartitionKind
