"""Worker lifecycle.

    parsed -> installing -> installed (waiting) -> activating -> activated
    installing | activating -> redundant (failed; install may be retried)

Install pre-warms the core partition. Activation prunes partitions of
previous versions and claims clients, after which requests are
intercepted. Waiting is skipped right after install by default; otherwise
a SKIP_WAITING message ends it.
"""

import asyncio
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from offline_cache.entities import RequestEntity
from offline_cache.exceptions import InstallError, LifecycleError, NetworkError
from offline_cache.protocols import Fetcher
from offline_cache.services.cache_store_manager import CacheStoreManager

logger = logging.getLogger(__name__)

SKIP_WAITING = "SKIP_WAITING"


class WorkerState(str, Enum):
    PARSED = "parsed"
    INSTALLING = "installing"
    INSTALLED = "installed"
    ACTIVATING = "activating"
    ACTIVATED = "activated"
    REDUNDANT = "redundant"


class LifecycleController:
    """Drives install, activation and the skip-waiting message.

    Example:
        ```python
        lifecycle = LifecycleController(manager, fetcher, core_requests)
        await lifecycle.install()          # activates too, unless waiting
        lifecycle.is_controlling           # True once clients are claimed
        ```
    """

    def __init__(
        self,
        manager: CacheStoreManager,
        fetcher: Fetcher,
        core_requests: list[RequestEntity],
        skip_waiting_on_install: bool = True,
    ) -> None:
        """Initialize the controller.

        Args:
            manager: Cache store manager for the current version.
            fetcher: Network fetcher used to pre-warm the core partition.
            core_requests: Shell assets stored during install.
            skip_waiting_on_install: Activate as soon as install succeeds.
        """
        self._manager = manager
        self._fetcher = fetcher
        self._core_requests = list(core_requests)
        self._skip_waiting = skip_waiting_on_install
        self._state = WorkerState.PARSED
        self._controlling = False
        self._lock = asyncio.Lock()

    @property
    def state(self) -> WorkerState:
        return self._state

    @property
    def is_waiting(self) -> bool:
        return self._state is WorkerState.INSTALLED

    @property
    def is_controlling(self) -> bool:
        """True once the activated worker has claimed its clients."""
        return self._controlling

    def _transition(self, state: WorkerState) -> None:
        logger.info("Worker %s -> %s", self._state.value, state.value)
        self._state = state

    async def install(self) -> None:
        """Pre-warm the core partition, then activate unless told to wait.

        Raises:
            InstallError: If any core asset could not be fetched; nothing is stored
            LifecycleError: If the worker is past the install phase
        """
        async with self._lock:
            if self._state not in (WorkerState.PARSED, WorkerState.REDUNDANT):
                raise LifecycleError("install", self._state.value)

            self._transition(WorkerState.INSTALLING)
            try:
                await self._prewarm()
            except InstallError:
                self._transition(WorkerState.REDUNDANT)
                raise
            self._transition(WorkerState.INSTALLED)

            if self._skip_waiting:
                await self._activate()

    async def _prewarm(self) -> None:
        results = await asyncio.gather(
            *(self._fetcher.fetch(request) for request in self._core_requests),
            return_exceptions=True,
        )

        failed = []
        for request, result in zip(self._core_requests, results):
            if isinstance(result, NetworkError):
                failed.append(request.url)
            elif isinstance(result, BaseException):
                raise result
            elif not result.ok:
                failed.append(request.url)
        if failed:
            raise InstallError(failed)

        partition = await self._manager.open_partition(self._manager.partitions.core)
        for request, response in zip(self._core_requests, results):
            await partition.put(request, response.clone())
        logger.info("Pre-cached %d core assets into %s", len(self._core_requests), partition.name)

    async def activate(self) -> list[str]:
        """Activate an installed worker.

        Returns:
            Names of the pruned partitions

        Raises:
            LifecycleError: If the worker is not installed and waiting
        """
        async with self._lock:
            if self._state is not WorkerState.INSTALLED:
                raise LifecycleError("activate", self._state.value)
            return await self._activate()

    async def _activate(self) -> list[str]:
        self._transition(WorkerState.ACTIVATING)
        try:
            deleted = await self._manager.prune_stale_partitions()
        except Exception:
            # Left redundant so that install can be retried
            self._transition(WorkerState.REDUNDANT)
            raise
        self.claim()
        self._transition(WorkerState.ACTIVATED)
        return deleted

    def claim(self) -> None:
        """Start intercepting requests for already connected clients."""
        self._controlling = True

    async def skip_waiting(self) -> None:
        """Stop waiting: activate now if installed, or right after install."""
        async with self._lock:
            self._skip_waiting = True
            if self._state is WorkerState.INSTALLED:
                await self._activate()

    async def handle_message(self, data: Mapping[str, Any] | None) -> bool:
        """Handle a control message from the page.

        Only {"type": "SKIP_WAITING"} is recognised.

        Returns:
            True if the message was acted upon, False if it was ignored
        """
        if not data or data.get("type") != SKIP_WAITING:
            logger.debug("Ignoring control message %r", data)
            return False
        await self.skip_waiting()
        return True
