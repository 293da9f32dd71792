from fastapi import FastAPI, Request, Response

from offline_cache.api.dependencies import ControlHandlerDep, ProxyHandlerDep, make_lifespan
from offline_cache.config import settings
from offline_cache.dto import HealthCheckResponse, WorkerMessageRequest, WorkerMessageResponse, WorkerStatusResponse
from offline_cache.services import CacheWorker

CONTROL_PREFIX = "/_worker"

PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(worker: CacheWorker | None = None) -> FastAPI:
    """Create the application.

    Control routes are registered before the catch-all proxy route so they
    are matched first; everything else is intercepted.

    Args:
        worker: Pre-built worker. If None, one is built from settings at startup.
    """
    app = FastAPI(
        title="Offline Cache",
        description="Caching layer between the print-shop web client and its origin",
        version="0.1.0",
        lifespan=make_lifespan(worker),
        docs_url=f"{CONTROL_PREFIX}/docs",
        redoc_url=None,
        openapi_url=f"{CONTROL_PREFIX}/openapi.json",
    )

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: ControlHandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    @app.get(f"{CONTROL_PREFIX}/status", response_model=WorkerStatusResponse)
    async def worker_status(handler: ControlHandlerDep) -> WorkerStatusResponse:
        """Lifecycle state and partition sizes."""
        return await handler.get_status()

    @app.post(f"{CONTROL_PREFIX}/message", response_model=WorkerMessageResponse)
    async def worker_message(request: WorkerMessageRequest, handler: ControlHandlerDep) -> WorkerMessageResponse:
        """Post a control message, e.g. {"type": "SKIP_WAITING"}."""
        return await handler.post_message(request)

    @app.post(f"{CONTROL_PREFIX}/update", response_model=WorkerStatusResponse)
    async def worker_update(handler: ControlHandlerDep) -> WorkerStatusResponse:
        """Retry install after a failed startup."""
        return await handler.update()

    @app.api_route("/{path:path}", methods=PROXY_METHODS, include_in_schema=False)
    async def proxy(request: Request, handler: ProxyHandlerDep) -> Response:
        return await handler.handle(request)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "offline_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
