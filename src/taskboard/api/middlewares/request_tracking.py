"""Request tracking middleware for graceful shutdown."""

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import RequestResponseEndpoint

from src.taskboard.core.errors import error_body
from src.taskboard.core.shutdown import request_tracker

# Health checks and scrapes keep answering while the app drains
_UNTRACKED_PATHS = frozenset({"/health", "/metrics"})


async def request_tracking_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Count in-flight requests; refuse new ones with 503 once draining."""
    if request.url.path in _UNTRACKED_PATHS:
        return await call_next(request)

    if request_tracker.is_shutting_down:
        return JSONResponse(
            status_code=503,
            content=error_body(
                "SERVICE_UNAVAILABLE", "server is shutting down", correlation_id.get()
            ),
        )

    async with request_tracker.track_request():
        return await call_next(request)
