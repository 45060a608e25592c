"""Store dependencies.

Handlers and services only see the store protocols; tests replace these
providers with in-memory fakes through ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends

from src.taskboard.api.dependencies.db import DBSession
from src.taskboard.repositories import (
    RefreshTokenRepository,
    RefreshTokenStore,
    TaskRepository,
    TaskStore,
    TeamRepository,
    TeamStore,
    UserRepository,
    UserStore,
)


def get_user_store(session: DBSession) -> UserStore:
    """Get the credential store."""
    return UserRepository(session)


def get_refresh_token_store(session: DBSession) -> RefreshTokenStore:
    """Get the refresh token ledger."""
    return RefreshTokenRepository(session)


def get_team_store(session: DBSession) -> TeamStore:
    """Get the team store."""
    return TeamRepository(session)


def get_task_store(session: DBSession) -> TaskStore:
    """Get the task store."""
    return TaskRepository(session)


UserStoreDep = Annotated[UserStore, Depends(get_user_store)]
RefreshTokenStoreDep = Annotated[RefreshTokenStore, Depends(get_refresh_token_store)]
TeamStoreDep = Annotated[TeamStore, Depends(get_team_store)]
TaskStoreDep = Annotated[TaskStore, Depends(get_task_store)]
