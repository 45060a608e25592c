"""Store interfaces.

Services depend on these protocols only. The SQL implementations live next to
this module; tests substitute in-memory fakes.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.taskboard.models import RefreshToken, Task, Team, TeamMember, User


class UserStore(Protocol):
    async def create(self, email: str, hashed_password: str, user_type: str) -> User:
        """Insert a user. Raises EmailAlreadyExistsError on a duplicate email."""
        ...

    async def get_by_id(self, user_id: UUID) -> User | None: ...

    async def get_by_email(self, email: str) -> User | None: ...

    async def list_all(self) -> list[User]: ...

    async def update_user_type(self, user_id: UUID, user_type: str, now: datetime) -> User:
        """Raises RecordNotFoundError if the user does not exist."""
        ...


class RefreshTokenStore(Protocol):
    async def issue(
        self,
        user_id: UUID,
        raw_token: str,
        expires_at: datetime,
        user_agent: str | None,
        source_ip: str | None,
        now: datetime | None = None,
    ) -> RefreshToken:
        """Persist the hash of ``raw_token``. Raises LedgerValidationError if already expired."""
        ...

    async def lookup_active(self, token_hash: str, now: datetime | None = None) -> RefreshToken:
        """Raises TokenNotFoundError, TokenRevokedError or TokenExpiredError."""
        ...

    async def revoke(self, token_hash: str, now: datetime) -> None:
        """Raises TokenNotFoundError if no active row was revoked."""
        ...

    async def revoke_all_for_user(self, user_id: UUID, now: datetime) -> int: ...

    async def purge_expired(self, cutoff: datetime) -> int: ...


class TeamStore(Protocol):
    async def create_with_owner(self, name: str, owner_id: UUID, now: datetime) -> Team:
        """Insert the team and the owner's membership atomically.

        Raises TeamNameTakenError on a case-insensitive name clash.
        """
        ...

    async def get_by_id(self, team_id: UUID) -> Team | None: ...

    async def list_for_user(self, user_id: UUID) -> list[Team]: ...

    async def get_member(self, team_id: UUID, user_id: UUID) -> TeamMember | None: ...

    async def list_members(self, team_id: UUID) -> list[TeamMember]: ...

    async def upsert_member(
        self, team_id: UUID, user_id: UUID, role: str, now: datetime
    ) -> TeamMember: ...

    async def remove_member(self, team_id: UUID, user_id: UUID) -> None:
        """Raises RecordNotFoundError if the user is not a member."""
        ...


class TaskStore(Protocol):
    async def create(
        self,
        team_id: UUID,
        title: str,
        description: str | None,
        reporter_id: UUID,
        assignee_id: UUID,
        due_at: datetime,
        now: datetime,
    ) -> Task: ...

    async def get_by_id(self, task_id: UUID) -> Task | None: ...

    async def list_for_team(
        self,
        team_id: UUID,
        *,
        assignee_id: UUID | None = None,
        reporter_id: UUID | None = None,
    ) -> list[Task]: ...

    async def list_by_reporter(self, user_id: UUID) -> list[Task]: ...

    async def list_by_assignee(self, user_id: UUID) -> list[Task]: ...

    async def update_assignee(self, task_id: UUID, assignee_id: UUID, now: datetime) -> Task: ...

    async def update_status(self, task_id: UUID, status: str, now: datetime) -> Task: ...

    async def update_details(
        self,
        task_id: UUID,
        now: datetime,
        *,
        title: str | None = None,
        description: str | None = None,
        due_at: datetime | None = None,
    ) -> Task:
        """Apply the non-None fields. Raises RecordNotFoundError."""
        ...

    async def delete(self, task_id: UUID) -> None:
        """Raises RecordNotFoundError."""
        ...

    async def find_due_for_reminder(self, start: datetime, end: datetime) -> list[Task]:
        """Open/in-progress tasks with start < due_at <= end and no reminder sent yet."""
        ...

    async def mark_reminder_sent(self, task_id: UUID, when: datetime) -> None:
        """Raises RecordNotFoundError."""
        ...
