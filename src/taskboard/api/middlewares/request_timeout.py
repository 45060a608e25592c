"""Per-request deadline."""

import asyncio

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import RequestResponseEndpoint

from src.taskboard.core.config import get_settings
from src.taskboard.core.errors import error_body
from src.taskboard.core.logging import get_logger

logger = get_logger(__name__)


async def request_timeout_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Cancel handlers that run past REQUEST_TIMEOUT_SECONDS and answer 500."""
    timeout = get_settings().request_timeout_seconds
    try:
        async with asyncio.timeout(timeout):
            return await call_next(request)
    except TimeoutError:
        logger.error(
            "Request timed out",
            method=request.method,
            path=request.url.path,
            timeout=timeout,
        )
        return JSONResponse(
            status_code=500,
            content=error_body("INTERNAL_ERROR", "request timed out", correlation_id.get()),
        )
