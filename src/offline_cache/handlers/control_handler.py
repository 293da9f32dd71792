"""HTTP handlers for the worker control channel.

Handlers convert between DTOs (API contracts) and worker calls, and map
domain errors to status codes.
"""

from fastapi import HTTPException, status

from offline_cache.dto import (
    HealthCheckResponse,
    WorkerMessageRequest,
    WorkerMessageResponse,
    WorkerStatusResponse,
)
from offline_cache.exceptions import InstallError, LifecycleError
from offline_cache.services import CacheWorker


class ControlHandler:
    """Handlers for /_worker/* and /health."""

    def __init__(self, worker: CacheWorker) -> None:
        self._worker = worker

    async def post_message(self, request: WorkerMessageRequest) -> WorkerMessageResponse:
        """Handle POST /_worker/message."""
        accepted = await self._worker.post_message(request.model_dump())
        return WorkerMessageResponse(
            accepted=accepted,
            state=self._worker.lifecycle.state.value,
        )

    async def get_status(self) -> WorkerStatusResponse:
        """Handle GET /_worker/status."""
        return WorkerStatusResponse(**await self._worker.status())

    async def update(self) -> WorkerStatusResponse:
        """Handle POST /_worker/update: retry a failed install.

        Raises:
            HTTPException: 409 if already installed, 503 if the core assets are unreachable
        """
        try:
            await self._worker.install()
        except LifecycleError as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
        except InstallError as e:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
        return await self.get_status()

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health."""
        is_healthy = await self._worker.is_healthy()
        return HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            storage_healthy=is_healthy,
            state=self._worker.lifecycle.state.value,
        )
