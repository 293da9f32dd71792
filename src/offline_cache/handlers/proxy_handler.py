"""HTTP handler for intercepted traffic.

Converts between Starlette requests/responses and the worker's entities.
Responses coming from the network or a partition are relayed verbatim;
the only response produced here is the 502 for pass-through requests the
upstream could not serve.
"""

from fastapi import HTTPException, Request, Response, status

from offline_cache.entities import RequestEntity, ResponseEntity
from offline_cache.exceptions import NetworkError
from offline_cache.services import CacheWorker


def to_response(result: ResponseEntity) -> Response:
    """Build a Starlette response carrying exactly the entity's status, headers and body."""
    response = Response(content=result.body, status_code=result.status)
    for name, value in result.headers:
        response.headers.append(name, value)
    return response


class ProxyHandler:
    """Relays every non-control request through the cache worker.

    Example:
        ```python
        handler = ProxyHandler(worker=worker)

        @app.api_route("/{path:path}", methods=["GET", "POST"])
        async def proxy(request: Request) -> Response:
            return await handler.handle(request)
        ```
    """

    def __init__(self, worker: CacheWorker) -> None:
        self._worker = worker

    async def to_entity(self, request: Request) -> RequestEntity:
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"

        return RequestEntity.for_path(
            self._worker.origin,
            path,
            method=request.method,
            destination=request.headers.get("sec-fetch-dest", ""),
            headers=tuple(request.headers.items()),
            body=await request.body(),
        )

    async def handle(self, request: Request) -> Response:
        """Answer an intercepted request.

        Raises:
            HTTPException: 502 if a pass-through request could not reach the upstream
        """
        entity = await self.to_entity(request)
        try:
            result = await self._worker.handle_fetch(entity)
        except NetworkError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Upstream unreachable: {e.reason}",
            ) from e
        return to_response(result)
