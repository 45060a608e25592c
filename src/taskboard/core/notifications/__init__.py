"""Outbound notifications."""

from src.taskboard.core.notifications.email import send_task_reminder_email

__all__ = ["send_task_reminder_email"]
