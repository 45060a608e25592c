"""Temporal Workflows - Re-exports for worker registration."""

from src.taskboard.temporal.workflows.task_reminders import TaskReminderWorkflow
from src.taskboard.temporal.workflows.token_cleanup import TokenCleanupWorkflow

__all__ = [
    "TaskReminderWorkflow",
    "TokenCleanupWorkflow",
]
