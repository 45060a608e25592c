"""Task model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.taskboard.models.base import utc_now
from src.taskboard.models.enums import TaskStatus


class Task(SQLModel, table=True):
    """A unit of work inside a team. The reporter never changes."""

    __tablename__ = "tasks"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    team_id: UUID = Field(foreign_key="teams.id", index=True, ondelete="CASCADE")
    title: str = Field(max_length=100)
    description: str | None = Field(default=None)
    reporter_id: UUID = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    assignee_id: UUID = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    due_at: datetime = Field(index=True)
    reminder_sent_at: datetime | None = Field(default=None)
    status: str = Field(default=TaskStatus.OPEN.value, max_length=20)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
