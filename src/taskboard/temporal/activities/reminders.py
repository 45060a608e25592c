"""Task due-date reminder activities."""

import asyncio
from datetime import timedelta
from uuid import UUID

from temporalio import activity

from src.taskboard.core.db import get_session
from src.taskboard.core.notifications import send_task_reminder_email
from src.taskboard.models import utc_now
from src.taskboard.repositories import TaskRepository, UserRepository
from src.taskboard.services.reminder_service import ReminderService, TaskReminder


@activity.defn
async def find_tasks_due_for_reminder(lead_hours: int) -> list[TaskReminder]:
    """Open or in-progress tasks due within the next ``lead_hours``, not yet reminded."""
    async with get_session() as session:
        service = ReminderService(TaskRepository(session), UserRepository(session))
        reminders = await service.collect_due(utc_now(), timedelta(hours=lead_hours))

    activity.logger.info(f"Found {len(reminders)} tasks due for reminder")
    return reminders


@activity.defn
async def send_task_reminder(reminder: TaskReminder) -> bool:
    """
    Email the assignee.

    Not idempotent on its own: the workflow only marks the task after this
    returns True, so a retry after a crash between the two steps can send a
    second email.
    """
    return await asyncio.to_thread(
        send_task_reminder_email,
        reminder.assignee_email,
        reminder.task_id,
        reminder.title,
        reminder.due_at,
    )


@activity.defn
async def mark_task_reminder_sent(task_id: str) -> bool:
    """Stamp reminder_sent_at. Returns False if the task no longer exists."""
    async with get_session() as session:
        service = ReminderService(TaskRepository(session), UserRepository(session))
        return await service.mark_sent(UUID(task_id), utc_now())
