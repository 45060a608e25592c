from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.taskboard.api.middlewares import setup_middlewares
from src.taskboard.api.routes.router import api_router
from src.taskboard.core.config import Settings, get_settings
from src.taskboard.core.db import dispose_engine
from src.taskboard.core.exceptions import setup_exception_handlers
from src.taskboard.core.health import setup_health_endpoint, setup_metrics
from src.taskboard.core.logging import get_logger, setup_logging
from src.taskboard.core.rate_limit import limiter
from src.taskboard.core.security import TokenConfig, TokenIssuer
from src.taskboard.core.shutdown import request_tracker
from src.taskboard.temporal.client import close_temporal_client

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("Starting application", app_name=settings.app_name, app_env=settings.app_env)

    yield

    grace_period = settings.shutdown_grace_period
    logger.info("Shutdown initiated", in_flight=request_tracker.in_flight_count)
    request_tracker.start_shutdown()
    if not await request_tracker.wait_for_drain(timeout=grace_period):
        logger.warning(
            "Shutdown grace period elapsed",
            grace_period=grace_period,
            in_flight=request_tracker.in_flight_count,
        )

    await close_temporal_client()
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Registration, login and refresh token rotation"},
    {"name": "users", "description": "User directory"},
    {"name": "teams", "description": "Teams and team membership"},
    {"name": "tasks", "description": "Task lifecycle"},
    {"name": "ops", "description": "Health and metrics"},
]


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Team task management API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    # Signing keys are read once; rotating them needs a restart
    app.state.token_issuer = TokenIssuer(TokenConfig.from_settings(settings))
    app.state.limiter = limiter

    setup_exception_handlers(app)
    setup_middlewares(app, settings)

    app.include_router(api_router)

    setup_health_endpoint(app)
    setup_metrics(app)

    return app


app = create_app()
