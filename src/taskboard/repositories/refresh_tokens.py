"""Refresh token ledger - SQL implementation of RefreshTokenStore."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select

from src.taskboard.core.security import hash_token
from src.taskboard.models import RefreshToken, utc_now
from src.taskboard.repositories.base import BaseRepository
from src.taskboard.repositories.errors import (
    LedgerValidationError,
    TokenExpiredError,
    TokenNotFoundError,
    TokenRevokedError,
)


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Ledger of issued refresh tokens, keyed by the SHA256 of the raw token."""

    model = RefreshToken

    async def issue(
        self,
        user_id: UUID,
        raw_token: str,
        expires_at: datetime,
        user_agent: str | None,
        source_ip: str | None,
        now: datetime | None = None,
    ) -> RefreshToken:
        now = now or utc_now()
        if expires_at <= now:
            raise LedgerValidationError("refresh token expiry must be in the future")
        record = RefreshToken(
            user_id=user_id,
            token_hash=hash_token(raw_token),
            issued_at=now,
            expires_at=expires_at,
            user_agent=user_agent,
            source_ip=source_ip,
        )
        self.add(record)
        await self.commit()
        return record

    async def lookup_active(self, token_hash: str, now: datetime | None = None) -> RefreshToken:
        result = await self.session.execute(
            select(RefreshToken).where(RefreshToken.token_hash == token_hash)
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise TokenNotFoundError("refresh token not found")
        if record.is_revoked:
            raise TokenRevokedError("refresh token revoked")
        if record.is_expired(now or utc_now()):
            raise TokenExpiredError("refresh token expired")
        return record

    async def revoke(self, token_hash: str, now: datetime) -> None:
        """Revoke one active token.

        The conditional UPDATE is the serialization point for concurrent
        rotations: only one caller sees a changed row.
        """
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.token_hash == token_hash)  # type: ignore[arg-type]
            .where(RefreshToken.revoked_at.is_(None))  # type: ignore[union-attr]
            .values(revoked_at=now)
        )
        result = await self.session.execute(stmt)
        await self.commit()
        if not result.rowcount:  # type: ignore[attr-defined]
            raise TokenNotFoundError("no active refresh token to revoke")

    async def revoke_all_for_user(self, user_id: UUID, now: datetime) -> int:
        """Revoke every active refresh token of a user. Returns the number revoked."""
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.user_id == user_id)  # type: ignore[arg-type]
            .where(RefreshToken.revoked_at.is_(None))  # type: ignore[union-attr]
            .values(revoked_at=now)
        )
        result = await self.session.execute(stmt)
        await self.commit()
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def purge_expired(self, cutoff: datetime) -> int:
        """Delete rows whose expiry is older than ``cutoff``.

        Idempotent: a second run with the same cutoff deletes nothing.
        """
        stmt = delete(RefreshToken).where(
            RefreshToken.expires_at < cutoff  # type: ignore[arg-type]
        )
        result = await self.session.execute(stmt)
        await self.commit()
        return result.rowcount or 0  # type: ignore[attr-defined]
