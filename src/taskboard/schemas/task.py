"""Task schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from src.taskboard.models import to_naive_utc

MAX_TITLE_LENGTH = 100


def _clean_title(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("title is required")
    if len(v) > MAX_TITLE_LENGTH:
        raise ValueError(f"title must be at most {MAX_TITLE_LENGTH} characters")
    return v


class TaskCreate(BaseModel):
    team_id: UUID
    title: str
    description: str | None = Field(default=None, max_length=5000)
    assignee_id: UUID | None = None
    due_at: datetime

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _clean_title(v)

    @field_validator("due_at")
    @classmethod
    def normalize_due_at(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class TaskDetailsUpdate(BaseModel):
    title: str | None = None
    description: str | None = Field(default=None, max_length=5000)
    due_at: datetime | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return None if v is None else _clean_title(v)

    @field_validator("due_at")
    @classmethod
    def normalize_due_at(cls, v: datetime | None) -> datetime | None:
        return None if v is None else to_naive_utc(v)

    @model_validator(mode="after")
    def require_one_field(self) -> "TaskDetailsUpdate":
        if self.title is None and self.description is None and self.due_at is None:
            raise ValueError("at least one of title, description or due_at is required")
        return self


class AssignTaskRequest(BaseModel):
    assignee_id: UUID


class UpdateStatusRequest(BaseModel):
    status: str


class TaskRead(BaseModel):
    id: UUID
    team_id: UUID
    title: str
    description: str | None
    reporter_id: UUID
    assignee_id: UUID
    due_at: datetime
    reminder_sent_at: datetime | None
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserTasksResponse(BaseModel):
    user_id: UUID
    tasks: list[TaskRead]


class TeamTasksResponse(BaseModel):
    team_id: UUID
    tasks: list[TaskRead]
