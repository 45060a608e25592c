"""Team store - SQL implementation of TeamStore."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from src.taskboard.core.errors import TeamNameTakenError
from src.taskboard.models import Team, TeamMember, TeamRole
from src.taskboard.repositories.base import BaseRepository
from src.taskboard.repositories.errors import RecordNotFoundError, violated_constraint

# Unique index on lower(name), created by the initial migration
TEAM_NAME_INDEX = "ux_teams_name_lower"


class TeamRepository(BaseRepository[Team]):
    """Repository for Team and TeamMember entities."""

    model = Team

    async def create_with_owner(self, name: str, owner_id: UUID, now: datetime) -> Team:
        team = Team(name=name, owner_id=owner_id, created_at=now, updated_at=now)
        self.add(team)
        try:
            # Team row must exist before the membership references it
            await self.session.flush()
            self.session.add(
                TeamMember(
                    team_id=team.id,
                    user_id=owner_id,
                    role=TeamRole.OWNER.value,
                    created_at=now,
                )
            )
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if violated_constraint(e) == TEAM_NAME_INDEX:
                raise TeamNameTakenError() from e
            raise
        except Exception:
            await self.session.rollback()
            raise
        return team

    async def list_for_user(self, user_id: UUID) -> list[Team]:
        result = await self.session.execute(
            select(Team)
            .join(TeamMember, TeamMember.team_id == Team.id)  # type: ignore[arg-type]
            .where(TeamMember.user_id == user_id)
            .order_by(Team.name)
        )
        return list(result.scalars().all())

    async def get_member(self, team_id: UUID, user_id: UUID) -> TeamMember | None:
        result = await self.session.execute(
            select(TeamMember).where(
                TeamMember.team_id == team_id,
                TeamMember.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_members(self, team_id: UUID) -> list[TeamMember]:
        result = await self.session.execute(
            select(TeamMember)
            .where(TeamMember.team_id == team_id)
            .order_by(TeamMember.created_at)
        )
        return list(result.scalars().all())

    async def upsert_member(
        self, team_id: UUID, user_id: UUID, role: str, now: datetime
    ) -> TeamMember:
        """Add a member, or update the role of an existing one."""
        stmt = (
            pg_insert(TeamMember)
            .values(team_id=team_id, user_id=user_id, role=role, created_at=now)
            .on_conflict_do_update(
                index_elements=["team_id", "user_id"],
                set_={"role": role},
            )
            .returning(TeamMember)
        )
        result = await self.session.execute(stmt, execution_options={"populate_existing": True})
        member = result.scalar_one()
        await self.commit()
        return member

    async def remove_member(self, team_id: UUID, user_id: UUID) -> None:
        stmt = delete(TeamMember).where(
            TeamMember.team_id == team_id,  # type: ignore[arg-type]
            TeamMember.user_id == user_id,  # type: ignore[arg-type]
        )
        result = await self.session.execute(stmt)
        await self.commit()
        if not result.rowcount:  # type: ignore[attr-defined]
            raise RecordNotFoundError("member not found in this team")
