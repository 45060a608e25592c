"""Authentication endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Cookie, Response, status
from starlette.requests import Request

from src.taskboard.api.dependencies import (
    AuthServiceDep,
    Client,
    CurrentIdentity,
    SettingsDep,
)
from src.taskboard.core.config import Settings
from src.taskboard.core.rate_limit import (
    LOGIN_RATE_LIMIT,
    REFRESH_RATE_LIMIT,
    REGISTER_RATE_LIMIT,
    limiter,
)
from src.taskboard.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LogoutAllResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    SessionUser,
)
from src.taskboard.schemas.user import UpdateUserTypeRequest, UpdateUserTypeResponse, UserDetail
from src.taskboard.services.auth_service import SessionTokens

router = APIRouter(prefix="/auth", tags=["auth"])

REFRESH_COOKIE_NAME = "refresh_token"
RefreshCookie = Annotated[str | None, Cookie(alias=REFRESH_COOKIE_NAME)]


def set_refresh_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=token,
        max_age=int(settings.refresh_token_ttl.total_seconds()),
        path="/",
        secure=settings.is_production,
        httponly=True,
        samesite="lax",
    )


def clear_refresh_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=REFRESH_COOKIE_NAME,
        path="/",
        secure=settings.is_production,
        httponly=True,
        samesite="lax",
    )


def _session_response(
    response: Response, session: SessionTokens, settings: Settings
) -> LoginResponse:
    set_refresh_cookie(response, session.refresh_token, settings)
    return LoginResponse(
        access_token=session.access_token,
        expires_in=session.expires_in,
        user=SessionUser(
            id=session.user.id, email=session.user.email, type=session.user.user_type
        ),
    )


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid email or password shorter than 8 characters"},
        409: {"description": "Email already registered"},
    },
)
@limiter.limit(REGISTER_RATE_LIMIT)
async def register(
    request: Request, data: RegisterRequest, service: AuthServiceDep
) -> RegisterResponse:
    """Create an account. New accounts are employees."""
    user = await service.register(data.email, data.password)
    return RegisterResponse(
        user_id=user.id,
        email=user.email,
        user_type=user.user_type,
        created_at=user.created_at,
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"description": "Invalid email or password"}},
)
@limiter.limit(LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    response: Response,
    data: LoginRequest,
    service: AuthServiceDep,
    client: Client,
    settings: SettingsDep,
) -> LoginResponse:
    """Authenticate and start a session.

    The access token is returned in the body; the refresh token is set as an
    HttpOnly cookie.
    """
    session = await service.login(data.email, data.password, client)
    return _session_response(response, session, settings)


@router.post(
    "/refresh",
    response_model=LoginResponse,
    responses={401: {"description": "Missing, invalid, revoked or expired refresh token"}},
)
@limiter.limit(REFRESH_RATE_LIMIT)
async def refresh(
    request: Request,
    response: Response,
    service: AuthServiceDep,
    client: Client,
    settings: SettingsDep,
    refresh_token: RefreshCookie = None,
) -> LoginResponse:
    """Rotate the refresh cookie and return a new access token.

    The presented refresh token is revoked; replaying it afterwards fails.
    """
    session = await service.refresh(refresh_token, client)
    return _session_response(response, session, settings)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    service: AuthServiceDep,
    settings: SettingsDep,
    refresh_token: RefreshCookie = None,
) -> MessageResponse:
    """End the current session. Always succeeds."""
    await service.logout(refresh_token)
    clear_refresh_cookie(response, settings)
    return MessageResponse(message="logged out")


@router.post("/logout-all", response_model=LogoutAllResponse)
async def logout_all(
    response: Response,
    identity: CurrentIdentity,
    service: AuthServiceDep,
    settings: SettingsDep,
) -> LogoutAllResponse:
    """Revoke every refresh token of the caller.

    Access tokens already handed out stay valid until they expire.
    """
    revoked = await service.logout_all(identity)
    clear_refresh_cookie(response, settings)
    return LogoutAllResponse(message="logged out from all sessions", revoked=revoked)


@router.patch(
    "/{user_id}/update-usertype",
    response_model=UpdateUserTypeResponse,
    responses={
        400: {"description": "Unknown user_type"},
        403: {"description": "Caller is not an admin, or targets themselves"},
        404: {"description": "User not found"},
    },
)
async def update_user_type(
    user_id: UUID,
    data: UpdateUserTypeRequest,
    identity: CurrentIdentity,
    service: AuthServiceDep,
) -> UpdateUserTypeResponse:
    user = await service.update_user_type(identity, user_id, data.user_type)
    return UpdateUserTypeResponse(user=UserDetail.model_validate(user))
