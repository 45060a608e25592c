"""Task store - SQL implementation of TaskStore."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select

from src.taskboard.models import Task, TaskStatus
from src.taskboard.models.enums import REMINDABLE_STATUSES
from src.taskboard.repositories.base import BaseRepository
from src.taskboard.repositories.errors import RecordNotFoundError


class TaskRepository(BaseRepository[Task]):
    """Repository for Task entity.

    List queries are unpaginated and ordered by due date.
    """

    model = Task

    async def create(
        self,
        team_id: UUID,
        title: str,
        description: str | None,
        reporter_id: UUID,
        assignee_id: UUID,
        due_at: datetime,
        now: datetime,
    ) -> Task:
        task = Task(
            team_id=team_id,
            title=title,
            description=description,
            reporter_id=reporter_id,
            assignee_id=assignee_id,
            due_at=due_at,
            status=TaskStatus.OPEN.value,
            created_at=now,
            updated_at=now,
        )
        self.add(task)
        await self.commit()
        return task

    async def list_for_team(
        self,
        team_id: UUID,
        *,
        assignee_id: UUID | None = None,
        reporter_id: UUID | None = None,
    ) -> list[Task]:
        query = select(Task).where(Task.team_id == team_id)
        if assignee_id is not None:
            query = query.where(Task.assignee_id == assignee_id)
        if reporter_id is not None:
            query = query.where(Task.reporter_id == reporter_id)
        result = await self.session.execute(query.order_by(Task.due_at))
        return list(result.scalars().all())

    async def list_by_reporter(self, user_id: UUID) -> list[Task]:
        result = await self.session.execute(
            select(Task).where(Task.reporter_id == user_id).order_by(Task.due_at)
        )
        return list(result.scalars().all())

    async def list_by_assignee(self, user_id: UUID) -> list[Task]:
        result = await self.session.execute(
            select(Task).where(Task.assignee_id == user_id).order_by(Task.due_at)
        )
        return list(result.scalars().all())

    async def update_assignee(self, task_id: UUID, assignee_id: UUID, now: datetime) -> Task:
        return await self._update(task_id, assignee_id=assignee_id, updated_at=now)

    async def update_status(self, task_id: UUID, status: str, now: datetime) -> Task:
        return await self._update(task_id, status=status, updated_at=now)

    async def update_details(
        self,
        task_id: UUID,
        now: datetime,
        *,
        title: str | None = None,
        description: str | None = None,
        due_at: datetime | None = None,
    ) -> Task:
        values: dict[str, Any] = {"updated_at": now}
        if title is not None:
            values["title"] = title
        if description is not None:
            values["description"] = description
        if due_at is not None:
            values["due_at"] = due_at
        return await self._update(task_id, **values)

    async def delete(self, task_id: UUID) -> None:
        result = await self.session.execute(
            delete(Task).where(Task.id == task_id)  # type: ignore[arg-type]
        )
        await self.commit()
        if not result.rowcount:  # type: ignore[attr-defined]
            raise RecordNotFoundError(f"task {task_id} not found")

    async def find_due_for_reminder(self, start: datetime, end: datetime) -> list[Task]:
        result = await self.session.execute(
            select(Task)
            .where(
                Task.due_at > start,
                Task.due_at <= end,
                Task.reminder_sent_at.is_(None),  # type: ignore[union-attr]
                Task.status.in_(REMINDABLE_STATUSES),  # type: ignore[attr-defined]
            )
            .order_by(Task.due_at)
        )
        return list(result.scalars().all())

    async def mark_reminder_sent(self, task_id: UUID, when: datetime) -> None:
        await self._update(task_id, reminder_sent_at=when, updated_at=when)

    async def _update(self, task_id: UUID, **values: Any) -> Task:
        stmt = (
            update(Task)
            .where(Task.id == task_id)  # type: ignore[arg-type]
            .values(**values)
            .returning(Task)
        )
        result = await self.session.execute(stmt, execution_options={"populate_existing": True})
        task = result.scalar_one_or_none()
        if task is None:
            await self.session.rollback()
            raise RecordNotFoundError(f"task {task_id} not found")
        await self.commit()
        return task
