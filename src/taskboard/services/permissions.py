"""Permission evaluator for team and task operations.

Every check reads the current membership from the team store; nothing is
cached between requests. Failed checks raise ForbiddenError, never
UnauthorizedError: the caller's identity is valid, its rights are not.
"""

from uuid import UUID

from src.taskboard.core.errors import ForbiddenError
from src.taskboard.models import Task
from src.taskboard.models.enums import TEAM_MANAGER_ROLES
from src.taskboard.repositories.protocols import TeamStore


class PermissionEvaluator:
    def __init__(self, teams: TeamStore):
        self.teams = teams

    async def is_team_member(self, team_id: UUID, user_id: UUID) -> bool:
        return await self.teams.get_member(team_id, user_id) is not None

    async def is_owner_or_admin(self, team_id: UUID, user_id: UUID) -> bool:
        member = await self.teams.get_member(team_id, user_id)
        return member is not None and member.role in TEAM_MANAGER_ROLES

    async def require_team_member(
        self, team_id: UUID, user_id: UUID, message: str = "you are not a member of this team"
    ) -> None:
        if not await self.is_team_member(team_id, user_id):
            raise ForbiddenError(message)

    async def require_owner_or_admin(
        self,
        team_id: UUID,
        user_id: UUID,
        message: str = "only team owners and admins can manage members",
    ) -> None:
        if not await self.is_owner_or_admin(team_id, user_id):
            raise ForbiddenError(message)


def require_reporter(task: Task, user_id: UUID, action: str) -> None:
    """Only the reporter may assign, edit or delete a task."""
    if task.reporter_id != user_id:
        raise ForbiddenError(f"only the reporter can {action} this task")


def require_assignee(task: Task, user_id: UUID) -> None:
    """Only the current assignee may change a task's status."""
    if task.assignee_id != user_id:
        raise ForbiddenError("only the assignee can update the status of this task")


def require_reporter_or_assignee(task: Task, user_id: UUID) -> None:
    """A task is visible to its reporter and its current assignee."""
    if user_id not in (task.reporter_id, task.assignee_id):
        raise ForbiddenError("you do not have access to this task")
