"""
Task Reminder Workflow.

Emails assignees of tasks coming due and records that each one was reminded,
so a task is reminded at most once per due date.
"""

import asyncio
from datetime import timedelta

from temporalio import workflow
from temporalio.common import RetryPolicy

with workflow.unsafe.imports_passed_through():
    from src.taskboard.services.reminder_service import TaskReminder
    from src.taskboard.temporal.activities import (
        find_tasks_due_for_reminder,
        mark_task_reminder_sent,
        send_task_reminder,
    )

_RETRY = RetryPolicy(maximum_attempts=3, initial_interval=timedelta(seconds=2))


@workflow.defn
class TaskReminderWorkflow:
    @workflow.run
    async def run(self, lead_hours: int = 24) -> dict[str, int]:
        """
        Args:
            lead_hours: Remind for tasks due within this many hours

        Returns:
            {"found": int, "sent": int, "failed": int}
        """
        reminders = await workflow.execute_activity(
            find_tasks_due_for_reminder,
            lead_hours,
            start_to_close_timeout=timedelta(minutes=2),
            retry_policy=_RETRY,
        )

        results = await asyncio.gather(*(self._remind(r) for r in reminders))
        sent = sum(1 for ok in results if ok)

        workflow.logger.info(
            f"Task reminders complete: {sent} sent, {len(results) - sent} failed"
        )
        return {"found": len(reminders), "sent": sent, "failed": len(results) - sent}

    async def _remind(self, reminder: TaskReminder) -> bool:
        delivered = await workflow.execute_activity(
            send_task_reminder,
            reminder,
            start_to_close_timeout=timedelta(seconds=30),
            retry_policy=_RETRY,
        )
        if not delivered:
            return False

        # Leave reminder_sent_at empty on failure so the next run retries
        return await workflow.execute_activity(
            mark_task_reminder_sent,
            reminder.task_id,
            start_to_close_timeout=timedelta(seconds=30),
            retry_policy=_RETRY,
        )
