"""SQLModel table models."""

from src.taskboard.models.auth import RefreshToken
from src.taskboard.models.base import to_naive_utc, utc_now
from src.taskboard.models.enums import TaskStatus, TeamRole, UserType
from src.taskboard.models.task import Task
from src.taskboard.models.team import Team, TeamMember
from src.taskboard.models.user import User

__all__ = [
    "RefreshToken",
    "Task",
    "TaskStatus",
    "Team",
    "TeamMember",
    "TeamRole",
    "User",
    "UserType",
    "to_naive_utc",
    "utc_now",
]
