"""Email client using Resend API."""

import html
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError

import resend

from src.taskboard.core.config import get_settings
from src.taskboard.core.logging import get_logger

logger = get_logger(__name__)

# Thread pool for email sending with timeout support
_email_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="email_sender")

_BODY_STYLE = (
    "font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; "
    "line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;"
)
_BUTTON_STYLE = (
    "background-color: #2563eb; color: white; padding: 12px 24px; "
    "text-decoration: none; border-radius: 6px; display: inline-block; font-weight: 500;"
)


def send_task_reminder_email(to: str, task_id: str, title: str, due_at: str) -> bool:
    """Remind an assignee that a task is coming due.

    Args:
        to: Assignee email address
        task_id: Task identifier, used to build the link
        title: Task title
        due_at: Due date as an ISO 8601 string (UTC)

    Returns:
        True if the email was sent (or logged in dev mode), False on error
    """
    settings = get_settings()
    task_url = f"{settings.app_url}/tasks/{task_id}"

    if not settings.resend_api_key:
        logger.warning(
            "RESEND_API_KEY not set - email not sent",
            task_id=task_id,
            email_type="task_reminder",
        )
        return True

    resend.api_key = settings.resend_api_key

    def _send() -> None:
        resend.Emails.send(
            {
                "from": settings.email_from,
                "to": [to],
                "subject": f"Reminder: {title} is due soon",
                "html": _get_task_reminder_html(title, due_at, task_url),
            }
        )

    try:
        future = _email_executor.submit(_send)
        future.result(timeout=settings.email_send_timeout_seconds)
        logger.info("Task reminder email sent", task_id=task_id)
        return True
    except FuturesTimeoutError:
        logger.error(
            "Email send timed out", task_id=task_id, timeout=settings.email_send_timeout_seconds
        )
        return False
    except Exception as e:
        logger.error("Failed to send task reminder email", task_id=task_id, error=str(e))
        return False


def _get_task_reminder_html(title: str, due_at: str, task_url: str) -> str:
    safe_title = html.escape(title)
    safe_due = html.escape(due_at)
    safe_url = html.escape(task_url, quote=True)
    return f"""<!DOCTYPE html>
<html>
<body style="{_BODY_STYLE}">
    <h2>Task due soon</h2>
    <p><strong>{safe_title}</strong> is due at {safe_due} UTC.</p>
    <p><a href="{safe_url}" style="{_BUTTON_STYLE}">Open task</a></p>
</body>
</html>"""
