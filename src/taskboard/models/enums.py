"""Shared enums for models."""

from enum import Enum


class UserType(str, Enum):
    """Account-wide user type."""

    EMPLOYEE = "employee"
    TASK_MANAGER = "task_manager"
    ADMIN = "admin"


class TeamRole(str, Enum):
    """User role within a team."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"


class TaskStatus(str, Enum):
    """Task workflow status."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    CANCELED = "canceled"


TEAM_CREATOR_TYPES = frozenset({UserType.ADMIN.value, UserType.TASK_MANAGER.value})
TEAM_MANAGER_ROLES = frozenset({TeamRole.OWNER.value, TeamRole.ADMIN.value})
REMINDABLE_STATUSES = frozenset({TaskStatus.OPEN.value, TaskStatus.IN_PROGRESS.value})
