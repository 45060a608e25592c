"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.taskboard.api.dependencies.auth import TokenIssuerDep
from src.taskboard.api.dependencies.stores import (
    RefreshTokenStoreDep,
    TaskStoreDep,
    TeamStoreDep,
    UserStoreDep,
)
from src.taskboard.core.config import Settings, get_settings
from src.taskboard.services import (
    AuthService,
    PermissionEvaluator,
    TaskService,
    TeamService,
    UserService,
    get_login_session_policy,
)

SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_permission_evaluator(teams: TeamStoreDep) -> PermissionEvaluator:
    """Get the permission evaluator (stateless, reads the team store)."""
    return PermissionEvaluator(teams)


PermissionsDep = Annotated[PermissionEvaluator, Depends(get_permission_evaluator)]


def get_auth_service(
    users: UserStoreDep,
    tokens: RefreshTokenStoreDep,
    issuer: TokenIssuerDep,
    settings: SettingsDep,
) -> AuthService:
    """Get auth service with the configured login session policy."""
    return AuthService(
        users,
        tokens,
        issuer,
        session_policy=get_login_session_policy(settings),
        bootstrap_admin_emails=settings.bootstrap_admin_emails,
    )


def get_user_service(users: UserStoreDep) -> UserService:
    """Get user service."""
    return UserService(users)


def get_team_service(
    teams: TeamStoreDep, users: UserStoreDep, permissions: PermissionsDep
) -> TeamService:
    """Get team service."""
    return TeamService(teams, users, permissions)


def get_task_service(
    tasks: TaskStoreDep, teams: TeamStoreDep, permissions: PermissionsDep
) -> TaskService:
    """Get task service."""
    return TaskService(tasks, teams, permissions)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
TeamServiceDep = Annotated[TeamService, Depends(get_team_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
