"""Tests for due-date reminders: service, activities and workflow."""

import uuid
from contextlib import asynccontextmanager
from datetime import timedelta

import pytest
from temporalio import activity
from temporalio.testing import ActivityEnvironment, WorkflowEnvironment
from temporalio.worker import Worker

from src.taskboard.models import TaskStatus, utc_now
from src.taskboard.services.reminder_service import ReminderService, TaskReminder
from src.taskboard.temporal.activities import cleanup, reminders
from src.taskboard.temporal.workflows import TaskReminderWorkflow, TokenCleanupWorkflow
from tests.factories import TaskFactory
from tests.fakes import InMemoryRefreshTokenStore, InMemoryTaskStore, InMemoryUserStore
from tests.helpers import seed_user

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


@pytest.fixture
def users() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def tasks() -> InMemoryTaskStore:
    return InMemoryTaskStore()


def add_task(tasks: InMemoryTaskStore, assignee_id, hours: float, **kwargs):
    task = TaskFactory.build(
        team_id=uuid.uuid4(),
        reporter_id=assignee_id,
        assignee_id=assignee_id,
        due_at=utc_now() + timedelta(hours=hours),
        **kwargs,
    )
    tasks.tasks[task.id] = task
    return task


class TestReminderService:
    async def test_collects_tasks_inside_window(self, tasks, users):
        user = seed_user(users)
        soon = add_task(tasks, user.id, hours=10)
        add_task(tasks, user.id, hours=30)
        add_task(tasks, user.id, hours=-1)
        add_task(tasks, user.id, hours=5, status=TaskStatus.DONE.value)
        add_task(tasks, user.id, hours=5, reminder_sent_at=utc_now())

        found = await ReminderService(tasks, users).collect_due(utc_now(), timedelta(hours=24))

        assert [r.task_id for r in found] == [str(soon.id)]
        assert found[0].assignee_email == user.email
        assert found[0].title == soon.title

    async def test_skips_missing_assignee(self, tasks, users):
        add_task(tasks, uuid.uuid4(), hours=10)

        found = await ReminderService(tasks, users).collect_due(utc_now(), timedelta(hours=24))
        assert found == []

    async def test_mark_sent(self, tasks, users):
        user = seed_user(users)
        task = add_task(tasks, user.id, hours=10)
        service = ReminderService(tasks, users)

        assert await service.mark_sent(task.id, utc_now()) is True
        assert tasks.tasks[task.id].reminder_sent_at is not None
        assert await service.collect_due(utc_now(), timedelta(hours=24)) == []

    async def test_mark_sent_for_deleted_task(self, tasks, users):
        assert await ReminderService(tasks, users).mark_sent(uuid.uuid4(), utc_now()) is False


@pytest.fixture
def patched_stores(monkeypatch, tasks, users):
    """Point the activities at the in-memory stores instead of a database session."""

    @asynccontextmanager
    async def fake_session():
        yield None

    refresh_tokens = InMemoryRefreshTokenStore()
    monkeypatch.setattr(reminders, "get_session", fake_session)
    monkeypatch.setattr(reminders, "TaskRepository", lambda session: tasks)
    monkeypatch.setattr(reminders, "UserRepository", lambda session: users)
    monkeypatch.setattr(cleanup, "get_session", fake_session)
    monkeypatch.setattr(cleanup, "RefreshTokenRepository", lambda session: refresh_tokens)
    return refresh_tokens


class TestReminderActivities:
    async def test_find_and_mark(self, patched_stores, tasks, users):
        user = seed_user(users)
        task = add_task(tasks, user.id, hours=3)
        env = ActivityEnvironment()

        found = await env.run(reminders.find_tasks_due_for_reminder, 24)
        assert [r.task_id for r in found] == [str(task.id)]

        assert await env.run(reminders.mark_task_reminder_sent, str(task.id)) is True
        assert await env.run(reminders.find_tasks_due_for_reminder, 24) == []

    async def test_send_uses_email_client(self, monkeypatch):
        sent = []
        monkeypatch.setattr(
            reminders,
            "send_task_reminder_email",
            lambda to, task_id, title, due_at: sent.append((to, task_id)) or True,
        )
        reminder = TaskReminder(
            task_id="t-1",
            team_id="team-1",
            title="Ship it",
            due_at="2030-01-01T12:00:00",
            assignee_id="u-1",
            assignee_email="dev@example.com",
        )

        assert await ActivityEnvironment().run(reminders.send_task_reminder, reminder) is True
        assert sent == [("dev@example.com", "t-1")]

    async def test_purge_refresh_tokens(self, patched_stores):
        user_id = uuid.uuid4()
        now = utc_now()
        issued_long_ago = now - timedelta(days=4)
        await patched_stores.issue(
            user_id, "old", now - timedelta(days=3), None, None, issued_long_ago
        )
        await patched_stores.issue(user_id, "live", now + timedelta(days=3), None, None, now)

        deleted = await ActivityEnvironment().run(cleanup.purge_refresh_tokens, 24)

        assert deleted == 1
        assert len(patched_stores.active_for(user_id)) == 1


# Workflow tests run against mocked activities registered under the real names.

_delivered: list[str] = []
_marked: list[str] = []


@activity.defn(name="find_tasks_due_for_reminder")
async def find_mock(lead_hours: int) -> list[TaskReminder]:
    return [
        TaskReminder(f"task-{i}", "team", f"Task {i}", "2030-01-01T00:00:00", "u", addr)
        for i, addr in enumerate(["ok@example.com", "bounce@example.com"])
    ]


@activity.defn(name="send_task_reminder")
async def send_mock(reminder: TaskReminder) -> bool:
    if reminder.assignee_email.startswith("bounce"):
        return False
    _delivered.append(reminder.task_id)
    return True


@activity.defn(name="mark_task_reminder_sent")
async def mark_mock(task_id: str) -> bool:
    _marked.append(task_id)
    return True


@activity.defn(name="purge_refresh_tokens")
async def purge_mock(retention_hours: int) -> int:
    return retention_hours // 12


class TestWorkflows:
    async def test_reminder_workflow_marks_only_delivered(self) -> None:
        _delivered.clear()
        _marked.clear()
        async with await WorkflowEnvironment.start_time_skipping() as env:  # noqa: SIM117
            async with Worker(
                env.client,
                task_queue="test-queue",
                workflows=[TaskReminderWorkflow],
                activities=[find_mock, send_mock, mark_mock],
            ):
                result = await env.client.execute_workflow(
                    TaskReminderWorkflow.run,
                    24,
                    id="test-task-reminders",
                    task_queue="test-queue",
                )

        assert result == {"found": 2, "sent": 1, "failed": 1}
        assert _delivered == ["task-0"]
        assert _marked == ["task-0"]

    async def test_cleanup_workflow(self) -> None:
        async with await WorkflowEnvironment.start_time_skipping() as env:  # noqa: SIM117
            async with Worker(
                env.client,
                task_queue="test-queue",
                workflows=[TokenCleanupWorkflow],
                activities=[purge_mock],
            ):
                result = await env.client.execute_workflow(
                    TokenCleanupWorkflow.run,
                    48,
                    id="test-token-cleanup",
                    task_queue="test-queue",
                )

        assert result == {"refresh_tokens": 4}
