"""Due-date reminders for task assignees."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID

from src.taskboard.core.logging import get_logger
from src.taskboard.repositories.errors import RecordNotFoundError
from src.taskboard.repositories.protocols import TaskStore, UserStore

logger = get_logger(__name__)


@dataclass
class TaskReminder:
    """Serializable reminder payload (passed between Temporal activities)."""

    task_id: str
    team_id: str
    title: str
    due_at: str
    assignee_id: str
    assignee_email: str


class ReminderService:
    def __init__(self, tasks: TaskStore, users: UserStore):
        self.tasks = tasks
        self.users = users

    async def collect_due(self, now: datetime, lead: timedelta) -> list[TaskReminder]:
        """Tasks due in (now, now + lead] whose assignee has not been reminded yet."""
        reminders: list[TaskReminder] = []
        for task in await self.tasks.find_due_for_reminder(now, now + lead):
            assignee = await self.users.get_by_id(task.assignee_id)
            if assignee is None:
                logger.warning("Skipping reminder, assignee missing", task_id=str(task.id))
                continue
            reminders.append(
                TaskReminder(
                    task_id=str(task.id),
                    team_id=str(task.team_id),
                    title=task.title,
                    due_at=task.due_at.isoformat(),
                    assignee_id=str(assignee.id),
                    assignee_email=assignee.email,
                )
            )
        return reminders

    async def mark_sent(self, task_id: UUID, when: datetime) -> bool:
        """Stamp reminder_sent_at. Returns False if the task was deleted meanwhile."""
        try:
            await self.tasks.mark_reminder_sent(task_id, when)
        except RecordNotFoundError:
            logger.info("Task deleted before reminder was recorded", task_id=str(task_id))
            return False
        return True
