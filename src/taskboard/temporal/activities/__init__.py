"""
Temporal Activities - idempotent units of work run by the jobs worker.

Each activity opens its own database session; nothing is shared with the
API process.
"""

from src.taskboard.temporal.activities.cleanup import purge_refresh_tokens
from src.taskboard.temporal.activities.reminders import (
    find_tasks_due_for_reminder,
    mark_task_reminder_sent,
    send_task_reminder,
)

__all__ = [
    "find_tasks_due_for_reminder",
    "mark_task_reminder_sent",
    "purge_refresh_tokens",
    "send_task_reminder",
]
