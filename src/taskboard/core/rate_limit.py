"""Rate limiting for the credential endpoints.

Limits are enforced per client IP with slowapi's in-memory storage, so each
API process keeps its own counters.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.taskboard.core.config import get_settings
from src.taskboard.core.logging import get_logger

logger = get_logger(__name__)

REGISTER_RATE_LIMIT = "5/minute"
LOGIN_RATE_LIMIT = "10/minute"
REFRESH_RATE_LIMIT = "30/minute"


def get_rate_limit_key(request: Request) -> str:
    """Generate rate limit key from the socket peer address only.

    Forwarded headers are client controlled; keying on them would let a
    caller rotate values to get a fresh bucket per request.
    """
    return get_remote_address(request) or "unknown"


def create_limiter() -> Limiter:
    """Create rate limiter. Disabled in testing environment."""
    settings = get_settings()

    if settings.app_env == "testing":
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    logger.info("Rate limiter using in-memory backend (not distributed)")
    return Limiter(key_func=get_rate_limit_key)


# Reads settings at import time; changing limits needs a restart
limiter = create_limiter()
