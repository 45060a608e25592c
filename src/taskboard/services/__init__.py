from src.taskboard.services.auth_service import AuthService, SessionTokens
from src.taskboard.services.permissions import (
    PermissionEvaluator,
    require_assignee,
    require_reporter,
    require_reporter_or_assignee,
)
from src.taskboard.services.reminder_service import ReminderService, TaskReminder
from src.taskboard.services.session_policy import (
    LoginSessionPolicy,
    allow_concurrent_sessions,
    get_login_session_policy,
    one_active_session,
)
from src.taskboard.services.task_service import TaskService, TeamTaskScope
from src.taskboard.services.team_service import TeamService
from src.taskboard.services.user_service import UserService

__all__ = [
    "AuthService",
    "LoginSessionPolicy",
    "PermissionEvaluator",
    "ReminderService",
    "SessionTokens",
    "TaskReminder",
    "TaskService",
    "TeamService",
    "TeamTaskScope",
    "UserService",
    "allow_concurrent_sessions",
    "get_login_session_policy",
    "one_active_session",
    "require_assignee",
    "require_reporter",
    "require_reporter_or_assignee",
]
