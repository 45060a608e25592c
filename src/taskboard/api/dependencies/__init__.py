"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenience.
"""

# Auth
from src.taskboard.api.dependencies.auth import (
    CurrentIdentity,
    TokenIssuerDep,
    get_request_identity,
    get_token_issuer,
)

# Client fingerprint
from src.taskboard.api.dependencies.client import Client, get_client_info, get_client_ip

# Database
from src.taskboard.api.dependencies.db import DBSession, get_db_session

# Services
from src.taskboard.api.dependencies.services import (
    AuthServiceDep,
    PermissionsDep,
    SettingsDep,
    TaskServiceDep,
    TeamServiceDep,
    UserServiceDep,
    get_auth_service,
    get_permission_evaluator,
    get_task_service,
    get_team_service,
    get_user_service,
)

# Stores
from src.taskboard.api.dependencies.stores import (
    RefreshTokenStoreDep,
    TaskStoreDep,
    TeamStoreDep,
    UserStoreDep,
    get_refresh_token_store,
    get_task_store,
    get_team_store,
    get_user_store,
)

__all__ = [
    # Auth
    "CurrentIdentity",
    "TokenIssuerDep",
    "get_request_identity",
    "get_token_issuer",
    # Client
    "Client",
    "get_client_info",
    "get_client_ip",
    # Database
    "DBSession",
    "get_db_session",
    # Services
    "AuthServiceDep",
    "PermissionsDep",
    "SettingsDep",
    "TaskServiceDep",
    "TeamServiceDep",
    "UserServiceDep",
    "get_auth_service",
    "get_permission_evaluator",
    "get_task_service",
    "get_team_service",
    "get_user_service",
    # Stores
    "RefreshTokenStoreDep",
    "TaskStoreDep",
    "TeamStoreDep",
    "UserStoreDep",
    "get_refresh_token_store",
    "get_task_store",
    "get_team_store",
    "get_user_store",
]
