"""Task service - task lifecycle inside a team."""

from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta
from enum import Enum
from uuid import UUID

from src.taskboard.core.errors import BadRequestError, NotFoundError
from src.taskboard.core.identity import RequestIdentity
from src.taskboard.core.logging import get_logger
from src.taskboard.models import Task, TaskStatus, utc_now
from src.taskboard.repositories.errors import RecordNotFoundError
from src.taskboard.repositories.protocols import TaskStore, TeamStore
from src.taskboard.schemas.task import TaskCreate, TaskDetailsUpdate
from src.taskboard.services.permissions import (
    PermissionEvaluator,
    require_assignee,
    require_reporter,
    require_reporter_or_assignee,
)

logger = get_logger(__name__)

MIN_DUE_LEAD = timedelta(hours=8)
NIL_UUID = UUID(int=0)


class TeamTaskScope(str, Enum):
    ALL = "all"
    ASSIGNEE = "assignee"
    REPORTER = "reporter"


class TaskService:
    def __init__(
        self,
        tasks: TaskStore,
        teams: TeamStore,
        permissions: PermissionEvaluator,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.tasks = tasks
        self.teams = teams
        self.permissions = permissions
        self._clock = clock

    def _check_due_at(self, due_at: datetime, now: datetime) -> None:
        if due_at < now + MIN_DUE_LEAD:
            raise BadRequestError("due_at must be at least 8 hours from now")

    async def _get_task(self, task_id: UUID) -> Task:
        task = await self.tasks.get_by_id(task_id)
        if task is None:
            raise NotFoundError("task not found")
        return task

    async def create_task(self, actor: RequestIdentity, data: TaskCreate) -> Task:
        """Create a task reported by the caller, assigned to the caller by default."""
        now = self._clock()
        self._check_due_at(data.due_at, now)

        if await self.teams.get_by_id(data.team_id) is None:
            raise NotFoundError("team not found")
        await self.permissions.require_team_member(
            data.team_id, actor.user_id, "you must be a member of the team to create tasks"
        )

        assignee_id = data.assignee_id or actor.user_id
        if assignee_id != actor.user_id:
            await self.permissions.require_team_member(
                data.team_id, assignee_id, "assignee must be a member of the team"
            )

        task = await self.tasks.create(
            data.team_id,
            data.title,
            data.description,
            actor.user_id,
            assignee_id,
            data.due_at,
            now,
        )
        logger.info(
            "Task created",
            task_id=str(task.id),
            team_id=str(task.team_id),
            assignee_id=str(assignee_id),
        )
        return task

    async def get_task(self, actor: RequestIdentity, task_id: UUID) -> Task:
        task = await self._get_task(task_id)
        require_reporter_or_assignee(task, actor.user_id)
        return task

    async def list_reported(self, actor: RequestIdentity) -> list[Task]:
        return await self.tasks.list_by_reporter(actor.user_id)

    async def list_assigned(self, actor: RequestIdentity) -> list[Task]:
        return await self.tasks.list_by_assignee(actor.user_id)

    async def list_team_tasks(
        self,
        actor: RequestIdentity,
        team_id: UUID,
        scope: TeamTaskScope = TeamTaskScope.ALL,
    ) -> list[Task]:
        await self.permissions.require_team_member(team_id, actor.user_id)
        if scope is TeamTaskScope.ASSIGNEE:
            return await self.tasks.list_for_team(team_id, assignee_id=actor.user_id)
        if scope is TeamTaskScope.REPORTER:
            return await self.tasks.list_for_team(team_id, reporter_id=actor.user_id)
        return await self.tasks.list_for_team(team_id)

    async def assign(self, actor: RequestIdentity, task_id: UUID, assignee_id: UUID) -> Task:
        if assignee_id == NIL_UUID:
            raise BadRequestError("assignee_id is required")

        task = await self._get_task(task_id)
        require_reporter(task, actor.user_id, "assign")
        await self.permissions.require_team_member(task.team_id, actor.user_id)
        await self.permissions.require_team_member(
            task.team_id, assignee_id, "assignee must be a member of the team"
        )

        updated = await self._apply(self.tasks.update_assignee(task_id, assignee_id, self._clock()))
        logger.info("Task assigned", task_id=str(task_id), assignee_id=str(assignee_id))
        return updated

    async def update_status(self, actor: RequestIdentity, task_id: UUID, status: str) -> Task:
        if status not in {s.value for s in TaskStatus}:
            raise BadRequestError(
                "status must be one of: " + ", ".join(s.value for s in TaskStatus)
            )

        task = await self._get_task(task_id)
        require_assignee(task, actor.user_id)

        updated = await self._apply(self.tasks.update_status(task_id, status, self._clock()))
        logger.info("Task status updated", task_id=str(task_id), status=status)
        return updated

    async def update_details(
        self, actor: RequestIdentity, task_id: UUID, patch: TaskDetailsUpdate
    ) -> Task:
        now = self._clock()
        if patch.due_at is not None:
            self._check_due_at(patch.due_at, now)

        task = await self._get_task(task_id)
        require_reporter(task, actor.user_id, "edit")

        return await self._apply(
            self.tasks.update_details(
                task_id,
                now,
                title=patch.title,
                description=patch.description,
                due_at=patch.due_at,
            )
        )

    async def delete(self, actor: RequestIdentity, task_id: UUID) -> None:
        task = await self._get_task(task_id)
        require_reporter(task, actor.user_id, "delete")
        try:
            await self.tasks.delete(task_id)
        except RecordNotFoundError as e:
            raise NotFoundError("task not found") from e
        logger.info("Task deleted", task_id=str(task_id))

    @staticmethod
    async def _apply(update: Awaitable[Task]) -> Task:
        """Await a store update, mapping a vanished row to NotFoundError."""
        try:
            return await update
        except RecordNotFoundError as e:
            raise NotFoundError("task not found") from e
