"""Tests for TeamService against the in-memory stores."""

from uuid import uuid4

import pytest

from src.taskboard.core.errors import (
    BadRequestError,
    ForbiddenError,
    NotFoundError,
    TeamNameTakenError,
)
from src.taskboard.core.identity import RequestIdentity
from src.taskboard.models import TeamRole, User, UserType
from src.taskboard.services.permissions import PermissionEvaluator
from src.taskboard.services.team_service import TeamService
from tests.fakes import InMemoryTeamStore, InMemoryUserStore
from tests.helpers import seed_team, seed_user

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


def identity(user: User) -> RequestIdentity:
    return RequestIdentity(user_id=user.id, email=user.email, user_type=user.user_type)


@pytest.fixture
def users() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def teams() -> InMemoryTeamStore:
    return InMemoryTeamStore()


@pytest.fixture
def team_service(teams: InMemoryTeamStore, users: InMemoryUserStore) -> TeamService:
    return TeamService(teams, users, PermissionEvaluator(teams))


class TestTeamService:
    @pytest.mark.parametrize("user_type", [UserType.ADMIN.value, UserType.TASK_MANAGER.value])
    async def test_creators(self, team_service, users, teams, user_type):
        creator = seed_user(users, user_type)

        team = await team_service.create_team(identity(creator), "  Platform  ")

        assert team.name == "Platform"
        member = await teams.get_member(team.id, creator.id)
        assert member.role == TeamRole.OWNER.value

    async def test_employee_cannot_create(self, team_service, users):
        employee = seed_user(users, UserType.EMPLOYEE.value)

        with pytest.raises(ForbiddenError):
            await team_service.create_team(identity(employee), "Platform")

    async def test_stale_token_user_type_is_ignored(self, team_service, users):
        demoted = seed_user(users, UserType.EMPLOYEE.value)
        stale = RequestIdentity(demoted.id, demoted.email, UserType.ADMIN.value)

        with pytest.raises(ForbiddenError):
            await team_service.create_team(stale, "Platform")

    async def test_name_unique_case_insensitive(self, team_service, users):
        creator = seed_user(users, UserType.ADMIN.value)
        await team_service.create_team(identity(creator), "Foo")

        with pytest.raises(TeamNameTakenError):
            await team_service.create_team(identity(creator), "foo")

    async def test_blank_name(self, team_service, users):
        creator = seed_user(users, UserType.ADMIN.value)

        with pytest.raises(BadRequestError):
            await team_service.create_team(identity(creator), "   ")

    async def test_add_member_and_change_role(self, team_service, users, teams):
        owner, other = seed_user(users), seed_user(users)
        team = seed_team(teams, owner)

        added = await team_service.add_member(identity(owner), team.id, other.id, "member")
        assert added.role == "member"
        promoted = await team_service.add_member(identity(owner), team.id, other.id, "admin")
        assert promoted.role == "admin"
        assert len(await teams.list_members(team.id)) == 2

    async def test_add_member_requires_manager_role(self, team_service, users, teams):
        owner, member, other = seed_user(users), seed_user(users), seed_user(users)
        team = seed_team(teams, owner, member)

        with pytest.raises(ForbiddenError):
            await team_service.add_member(identity(member), team.id, other.id, "member")

    async def test_add_member_validation(self, team_service, users, teams):
        owner = seed_user(users)
        team = seed_team(teams, owner)

        with pytest.raises(BadRequestError):
            await team_service.add_member(identity(owner), team.id, uuid4(), "superuser")
        with pytest.raises(NotFoundError):
            await team_service.add_member(identity(owner), team.id, uuid4(), "member")

    async def test_remove_member(self, team_service, users, teams):
        owner, member = seed_user(users), seed_user(users)
        team = seed_team(teams, owner, member)

        await team_service.remove_member(identity(owner), team.id, member.id)

        assert await teams.get_member(team.id, member.id) is None
        with pytest.raises(NotFoundError):
            await team_service.remove_member(identity(owner), team.id, member.id)

    async def test_list_members_requires_membership(self, team_service, users, teams):
        owner, outsider = seed_user(users), seed_user(users)
        team = seed_team(teams, owner)

        assert len(await team_service.list_members(identity(owner), team.id)) == 1
        with pytest.raises(ForbiddenError):
            await team_service.list_members(identity(outsider), team.id)

