"""Stores: protocols plus their SQL implementations."""

from src.taskboard.repositories.errors import (
    LedgerValidationError,
    RecordNotFoundError,
    TokenExpiredError,
    TokenLookupError,
    TokenNotFoundError,
    TokenRevokedError,
)
from src.taskboard.repositories.protocols import (
    RefreshTokenStore,
    TaskStore,
    TeamStore,
    UserStore,
)
from src.taskboard.repositories.refresh_tokens import RefreshTokenRepository
from src.taskboard.repositories.tasks import TaskRepository
from src.taskboard.repositories.teams import TeamRepository
from src.taskboard.repositories.users import UserRepository

__all__ = [
    # Protocols
    "RefreshTokenStore",
    "TaskStore",
    "TeamStore",
    "UserStore",
    # SQL implementations
    "RefreshTokenRepository",
    "TaskRepository",
    "TeamRepository",
    "UserRepository",
    # Errors
    "LedgerValidationError",
    "RecordNotFoundError",
    "TokenExpiredError",
    "TokenLookupError",
    "TokenNotFoundError",
    "TokenRevokedError",
]
