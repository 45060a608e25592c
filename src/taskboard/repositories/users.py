"""Credential store - SQL implementation of UserStore."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from src.taskboard.core.errors import EmailAlreadyExistsError
from src.taskboard.models import User
from src.taskboard.repositories.base import BaseRepository
from src.taskboard.repositories.errors import RecordNotFoundError, violated_constraint

USER_EMAIL_INDEX = "ix_users_email"


class UserRepository(BaseRepository[User]):
    """Repository for User entity."""

    model = User

    async def create(self, email: str, hashed_password: str, user_type: str) -> User:
        user = User(
            email=email.strip().lower(), hashed_password=hashed_password, user_type=user_type
        )
        self.add(user)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if violated_constraint(e) == USER_EMAIL_INDEX:
                raise EmailAlreadyExistsError() from e
            raise
        return user

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email (case-insensitive)."""
        result = await self.session.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[User]:
        result = await self.session.execute(select(User).order_by(User.email))
        return list(result.scalars().all())

    async def update_user_type(self, user_id: UUID, user_type: str, now: datetime) -> User:
        stmt = (
            update(User)
            .where(User.id == user_id)  # type: ignore[arg-type]
            .values(user_type=user_type, updated_at=now)
            .returning(User)
        )
        result = await self.session.execute(stmt, execution_options={"populate_existing": True})
        user = result.scalar_one_or_none()
        if user is None:
            await self.session.rollback()
            raise RecordNotFoundError(f"user {user_id} not found")
        await self.commit()
        return user
