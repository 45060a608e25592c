"""Login session policies.

A policy runs on every successful login, before the new refresh token is
issued. The default, ``one_active_session``, revokes all earlier refresh
tokens of the user, so logging in on one device logs out every other device.
"""

from collections.abc import Awaitable, Callable
from datetime import datetime
from uuid import UUID

from src.taskboard.core.config import Settings
from src.taskboard.core.logging import get_logger
from src.taskboard.repositories.protocols import RefreshTokenStore

logger = get_logger(__name__)

LoginSessionPolicy = Callable[[RefreshTokenStore, UUID, datetime], Awaitable[int]]


async def one_active_session(tokens: RefreshTokenStore, user_id: UUID, now: datetime) -> int:
    """Revoke every prior refresh token of the user. Returns the number revoked."""
    revoked = await tokens.revoke_all_for_user(user_id, now)
    if revoked:
        logger.info("Prior sessions revoked on login", user_id=str(user_id), revoked=revoked)
    return revoked


async def allow_concurrent_sessions(tokens: RefreshTokenStore, user_id: UUID, now: datetime) -> int:
    """Keep prior sessions alive."""
    return 0


def get_login_session_policy(settings: Settings) -> LoginSessionPolicy:
    if settings.single_session_login:
        return one_active_session
    return allow_concurrent_sessions
