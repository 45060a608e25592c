"""Application middlewares."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.taskboard.core.config import Settings

from .logging_context import logging_context_middleware
from .request_timeout import request_timeout_middleware
from .request_tracking import request_tracking_middleware
from .security_headers import SecurityHeadersMiddleware

__all__ = [
    "setup_middlewares",
    "SecurityHeadersMiddleware",
    "logging_context_middleware",
    "request_timeout_middleware",
    "request_tracking_middleware",
]


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Configure all application middlewares.

    Starlette wraps each added middleware around the previous ones, so the
    last one added runs first. The correlation id must be set before the
    logging context binds it, hence it is added last.
    """
    # Deadline - innermost, wraps only the route handler
    @app.middleware("http")
    async def _request_timeout(request, call_next):  # type: ignore[no-untyped-def]
        return await request_timeout_middleware(request, call_next)

    # Request tracking - for graceful shutdown
    @app.middleware("http")
    async def _request_tracking(request, call_next):  # type: ignore[no-untyped-def]
        return await request_tracking_middleware(request, call_next)

    # Logging context - binds request_id to structlog context
    @app.middleware("http")
    async def _logging_context(request, call_next):  # type: ignore[no-untyped-def]
        return await logging_context_middleware(request, call_next)

    csp = None if settings.enable_openapi else SecurityHeadersMiddleware.PRODUCTION_CSP
    app.add_middleware(
        SecurityHeadersMiddleware,
        content_security_policy=csp,
        strict_transport_security=(
            "max-age=31536000; includeSubDomains" if settings.is_production else None
        ),
    )

    # CORS - credentials allowed so the refresh cookie travels cross-origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )

    # Correlation ID - generates/propagates X-Request-ID, outermost
    app.add_middleware(CorrelationIdMiddleware)
