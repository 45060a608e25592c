"""Refresh token ledger cleanup."""

from datetime import timedelta

from temporalio import activity

from src.taskboard.core.db import get_session
from src.taskboard.models import utc_now
from src.taskboard.repositories import RefreshTokenRepository


@activity.defn
async def purge_refresh_tokens(retention_hours: int) -> int:
    """
    Delete ledger rows that expired more than ``retention_hours`` ago.

    Revoked rows that have not expired yet are kept so a replayed token is
    still reported as revoked rather than unknown.

    Idempotent: a second run finds nothing left to delete.

    Returns:
        Number of rows deleted
    """
    cutoff = utc_now() - timedelta(hours=retention_hours)
    activity.logger.info(f"Purging refresh tokens expired before {cutoff.isoformat()}")

    async with get_session() as session:
        count = await RefreshTokenRepository(session).purge_expired(cutoff)

    activity.logger.info(f"Deleted {count} expired refresh tokens")
    return count
