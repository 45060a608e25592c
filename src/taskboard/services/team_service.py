"""Team service - team creation and membership management."""

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

from src.taskboard.core.errors import BadRequestError, ForbiddenError, NotFoundError
from src.taskboard.core.identity import RequestIdentity
from src.taskboard.core.logging import get_logger
from src.taskboard.models import Team, TeamMember, TeamRole, utc_now
from src.taskboard.models.enums import TEAM_CREATOR_TYPES
from src.taskboard.repositories.errors import RecordNotFoundError
from src.taskboard.repositories.protocols import TeamStore, UserStore
from src.taskboard.services.permissions import PermissionEvaluator

logger = get_logger(__name__)


class TeamService:
    def __init__(
        self,
        teams: TeamStore,
        users: UserStore,
        permissions: PermissionEvaluator,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.teams = teams
        self.users = users
        self.permissions = permissions
        self._clock = clock

    async def create_team(self, actor: RequestIdentity, name: str) -> Team:
        """Create a team owned by the caller.

        The caller's user_type is re-read from the store: a demotion takes
        effect immediately, not when the access token expires.
        """
        name = name.strip()
        if not name:
            raise BadRequestError("team name is required")

        user = await self.users.get_by_id(actor.user_id)
        if user is None or user.user_type not in TEAM_CREATOR_TYPES:
            raise ForbiddenError("only admins and task managers can create teams")

        team = await self.teams.create_with_owner(name, actor.user_id, self._clock())
        logger.info("Team created", team_id=str(team.id), owner_id=str(actor.user_id))
        return team

    async def list_my_teams(self, actor: RequestIdentity) -> list[Team]:
        return await self.teams.list_for_user(actor.user_id)

    async def list_members(self, actor: RequestIdentity, team_id: UUID) -> list[TeamMember]:
        await self.permissions.require_team_member(team_id, actor.user_id)
        return await self.teams.list_members(team_id)

    async def add_member(
        self, actor: RequestIdentity, team_id: UUID, user_id: UUID, role: str
    ) -> TeamMember:
        """Add a member or change the role of an existing one."""
        if role not in {r.value for r in TeamRole}:
            raise BadRequestError("role must be one of: " + ", ".join(r.value for r in TeamRole))

        await self.permissions.require_owner_or_admin(team_id, actor.user_id)

        if await self.users.get_by_id(user_id) is None:
            raise NotFoundError("user not found")

        member = await self.teams.upsert_member(team_id, user_id, role, self._clock())
        logger.info(
            "Team member upserted",
            team_id=str(team_id),
            member_id=str(user_id),
            role=role,
            actor_id=str(actor.user_id),
        )
        return member

    async def remove_member(self, actor: RequestIdentity, team_id: UUID, user_id: UUID) -> None:
        # TODO: refuse removing the last owner once that policy is settled
        await self.permissions.require_owner_or_admin(team_id, actor.user_id)
        try:
            await self.teams.remove_member(team_id, user_id)
        except RecordNotFoundError as e:
            raise NotFoundError("member not found in this team") from e
        logger.info(
            "Team member removed",
            team_id=str(team_id),
            member_id=str(user_id),
            actor_id=str(actor.user_id),
        )
