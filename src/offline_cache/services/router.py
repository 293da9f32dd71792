"""Request router.

Classifies each intercepted request and picks a strategy and partition.
Rules, first match wins:

1. non-GET                                  -> not intercepted (None)
2. path under the API prefix                -> network-first, api
3. image/style/script or bundle path        -> stale-while-revalidate, assets
4. anything else (navigations, misc GETs)   -> cache-first, core
"""

from offline_cache.config import settings
from offline_cache.entities import PartitionKind, RequestEntity, Route, StrategyKind

ASSET_DESTINATIONS = frozenset({"image", "style", "script"})


class RequestRouter:
    """Stateless dispatch table."""

    def __init__(self, api_prefix: str | None = None, bundle_prefix: str | None = None) -> None:
        self._api_prefix = api_prefix or settings.api_prefix
        self._bundle_prefix = bundle_prefix or settings.bundle_prefix

    def route(self, request: RequestEntity) -> Route | None:
        """Select the route for request.

        Returns:
            The Route, or None when the request must go straight to the network
        """
        if not request.is_get:
            return None

        path = request.path
        if path.startswith(self._api_prefix):
            return Route(StrategyKind.NETWORK_FIRST, PartitionKind.API)

        if request.destination.lower() in ASSET_DESTINATIONS or path.startswith(self._bundle_prefix):
            return Route(StrategyKind.STALE_WHILE_REVALIDATE, PartitionKind.ASSETS)

        return Route(StrategyKind.CACHE_FIRST, PartitionKind.CORE)
