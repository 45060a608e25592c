"""Team endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.taskboard.api.dependencies import CurrentIdentity, TaskServiceDep, TeamServiceDep
from src.taskboard.schemas.auth import MessageResponse
from src.taskboard.schemas.task import TaskRead, TeamTasksResponse
from src.taskboard.schemas.team import (
    AddMemberRequest,
    AddMemberResponse,
    MyTeamsResponse,
    TeamCreate,
    TeamMemberRead,
    TeamMembersResponse,
    TeamRead,
)
from src.taskboard.services.task_service import TeamTaskScope

router = APIRouter(prefix="/teams", tags=["teams"])


@router.post(
    "",
    response_model=TeamRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        403: {"description": "Only admins and task managers can create teams"},
        409: {"description": "Team name already in use"},
    },
)
async def create_team(
    data: TeamCreate, identity: CurrentIdentity, service: TeamServiceDep
) -> TeamRead:
    """Create a team. The caller becomes its owner."""
    team = await service.create_team(identity, data.name)
    return TeamRead.model_validate(team)


@router.get("/mine", response_model=MyTeamsResponse)
async def my_teams(identity: CurrentIdentity, service: TeamServiceDep) -> MyTeamsResponse:
    teams = await service.list_my_teams(identity)
    return MyTeamsResponse(
        user_id=identity.user_id,
        teams=[TeamRead.model_validate(t) for t in teams],
    )


@router.get("/{team_id}/members", response_model=TeamMembersResponse)
async def list_members(
    team_id: UUID, identity: CurrentIdentity, service: TeamServiceDep
) -> TeamMembersResponse:
    members = await service.list_members(identity, team_id)
    return TeamMembersResponse(
        team_id=team_id,
        members=[TeamMemberRead.model_validate(m) for m in members],
    )


@router.post(
    "/{team_id}/members",
    response_model=AddMemberResponse,
    responses={
        400: {"description": "Invalid role"},
        403: {"description": "Only the team owner or an admin can manage members"},
        404: {"description": "User not found"},
    },
)
async def add_member(
    team_id: UUID,
    data: AddMemberRequest,
    identity: CurrentIdentity,
    service: TeamServiceDep,
) -> AddMemberResponse:
    """Add a member, or change the role of an existing member."""
    member = await service.add_member(identity, team_id, data.user_id, data.role)
    return AddMemberResponse(team_id=team_id, member=TeamMemberRead.model_validate(member))


@router.delete("/{team_id}/members/{user_id}", response_model=MessageResponse)
async def remove_member(
    team_id: UUID,
    user_id: UUID,
    identity: CurrentIdentity,
    service: TeamServiceDep,
) -> MessageResponse:
    await service.remove_member(identity, team_id, user_id)
    return MessageResponse(message="member removed")


async def _team_tasks(
    team_id: UUID, identity: CurrentIdentity, service: TaskServiceDep, scope: TeamTaskScope
) -> TeamTasksResponse:
    tasks = await service.list_team_tasks(identity, team_id, scope)
    return TeamTasksResponse(team_id=team_id, tasks=[TaskRead.model_validate(t) for t in tasks])


@router.get("/{team_id}/tasks", response_model=TeamTasksResponse)
async def team_tasks(
    team_id: UUID, identity: CurrentIdentity, service: TaskServiceDep
) -> TeamTasksResponse:
    return await _team_tasks(team_id, identity, service, TeamTaskScope.ALL)


@router.get("/{team_id}/tasks/assignee", response_model=TeamTasksResponse)
async def team_tasks_assigned_to_me(
    team_id: UUID, identity: CurrentIdentity, service: TaskServiceDep
) -> TeamTasksResponse:
    return await _team_tasks(team_id, identity, service, TeamTaskScope.ASSIGNEE)


@router.get("/{team_id}/tasks/reporter", response_model=TeamTasksResponse)
async def team_tasks_reported_by_me(
    team_id: UUID, identity: CurrentIdentity, service: TaskServiceDep
) -> TeamTasksResponse:
    return await _team_tasks(team_id, identity, service, TeamTaskScope.REPORTER)
