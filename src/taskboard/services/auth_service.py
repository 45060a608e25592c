"""Authentication service - registration, login, refresh rotation, logout."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from starlette.concurrency import run_in_threadpool

from src.taskboard.core.errors import (
    BadRequestError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
)
from src.taskboard.core.identity import ClientInfo, RequestIdentity
from src.taskboard.core.logging import get_logger
from src.taskboard.core.security import (
    IssuedToken,
    TokenInvalidError,
    TokenIssuer,
    dummy_password_hash,
    hash_password,
    hash_token,
    verify_password,
)
from src.taskboard.models import User, UserType, utc_now
from src.taskboard.repositories.errors import (
    RecordNotFoundError,
    TokenLookupError,
    TokenNotFoundError,
)
from src.taskboard.repositories.protocols import RefreshTokenStore, UserStore
from src.taskboard.schemas.auth import MIN_PASSWORD_LENGTH
from src.taskboard.services.session_policy import LoginSessionPolicy, one_active_session

logger = get_logger(__name__)

MIN_EMAIL_LENGTH = 4


@dataclass(frozen=True)
class SessionTokens:
    """Result of a login or a refresh rotation."""

    access_token: str
    refresh_token: str
    expires_in: int
    user: User


class AuthService:
    """Authentication service.

    Refresh tokens are single use: each successful refresh revokes the
    presented token and issues a successor. Login runs the configured
    ``LoginSessionPolicy`` before issuing the new refresh token.
    """

    def __init__(
        self,
        users: UserStore,
        tokens: RefreshTokenStore,
        issuer: TokenIssuer,
        session_policy: LoginSessionPolicy = one_active_session,
        bootstrap_admin_emails: list[str] | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.users = users
        self.tokens = tokens
        self.issuer = issuer
        self.session_policy = session_policy
        self.bootstrap_admin_emails = frozenset(bootstrap_admin_emails or [])
        self._clock = clock

    async def register(self, email: str, password: str) -> User:
        """Create an employee account (admin for bootstrap emails).

        Raises:
            EmailAlreadyExistsError: If the email is already registered.
        """
        email = email.strip().lower()
        user_type = (
            UserType.ADMIN.value
            if email in self.bootstrap_admin_emails
            else UserType.EMPLOYEE.value
        )
        hashed = await run_in_threadpool(hash_password, password.strip())
        user = await self.users.create(email, hashed, user_type)
        logger.info("User registered", user_id=str(user.id), user_type=user.user_type)
        return user

    async def login(self, email: str, password: str, client: ClientInfo) -> SessionTokens:
        """Verify credentials and start a new session.

        Every failure raises the same InvalidCredentialsError so the response
        never reveals whether the email exists.
        """
        email = email.strip().lower()
        password = password.strip()
        if len(email) < MIN_EMAIL_LENGTH or "@" not in email or len(password) < MIN_PASSWORD_LENGTH:
            logger.info("Login failed", reason="malformed_credentials")
            raise InvalidCredentialsError()

        user = await self.users.get_by_email(email)
        # Always verify, against a dummy hash for unknown users, to keep timing uniform
        password_hash = user.hashed_password if user else dummy_password_hash()
        password_valid = await run_in_threadpool(verify_password, password, password_hash)

        if user is None or not password_valid:
            logger.info("Login failed", reason="bad_credentials")
            raise InvalidCredentialsError()

        now = self._clock()
        await self.session_policy(self.tokens, user.id, now)
        access, refresh = self._mint_pair(user)
        tokens = await self._record_session(user, access, refresh, client, now)
        logger.info("Login succeeded", user_id=str(user.id), source_ip=client.ip)
        return tokens

    async def refresh(self, raw_token: str | None, client: ClientInfo) -> SessionTokens:
        """Rotate a refresh token.

        Validate the JWT, check the ledger, mint a new pair, revoke the
        presented token, then record its successor.
        """
        if not raw_token:
            raise UnauthorizedError("missing refresh token")

        try:
            claims = self.issuer.validate_refresh(raw_token)
        except TokenInvalidError as e:
            logger.info("Refresh rejected", reason="invalid_token", error=str(e))
            raise UnauthorizedError("invalid refresh token") from e

        token_hash = hash_token(raw_token)
        now = self._clock()
        try:
            record = await self.tokens.lookup_active(token_hash, now)
        except TokenLookupError as e:
            logger.info("Refresh rejected", reason=e.reason, user_id=str(claims.user_id))
            raise UnauthorizedError("invalid refresh token") from e

        if record.user_id != claims.user_id:
            logger.warning(
                "Refresh rejected",
                reason="subject_mismatch",
                user_id=str(claims.user_id),
                record_user_id=str(record.user_id),
            )
            raise UnauthorizedError("invalid refresh token")

        user = await self.users.get_by_id(record.user_id)
        if user is None:
            logger.info("Refresh rejected", reason="user_missing", user_id=str(record.user_id))
            raise UnauthorizedError("invalid refresh token")

        access, successor = self._mint_pair(user)
        try:
            await self.tokens.revoke(token_hash, now)
        except TokenNotFoundError as e:
            # Lost a race against a concurrent rotation of the same token
            logger.warning("Refresh rejected", reason="concurrent_rotation", user_id=str(user.id))
            raise UnauthorizedError("invalid refresh token") from e

        tokens = await self._record_session(user, access, successor, client, now)
        logger.info("Refresh token rotated", user_id=str(user.id), source_ip=client.ip)
        return tokens

    async def logout(self, raw_token: str | None) -> None:
        """Revoke the presented refresh token, if any. Never fails for a bad token."""
        if not raw_token:
            return
        try:
            await self.tokens.revoke(hash_token(raw_token), self._clock())
        except TokenNotFoundError:
            logger.debug("Logout with unknown or already revoked refresh token")
            return
        logger.info("Logged out")

    async def logout_all(self, identity: RequestIdentity) -> int:
        """Revoke every refresh token of the caller. Returns the number revoked."""
        revoked = await self.tokens.revoke_all_for_user(identity.user_id, self._clock())
        logger.info("Logged out everywhere", user_id=str(identity.user_id), revoked=revoked)
        return revoked

    async def update_user_type(
        self, actor: RequestIdentity, user_id: UUID, user_type: str
    ) -> User:
        """Change another user's user_type. Only current admins may do this."""
        if actor.user_id == user_id:
            raise ForbiddenError("you cannot change your own user_type")

        actor_user = await self.users.get_by_id(actor.user_id)
        if actor_user is None or actor_user.user_type != UserType.ADMIN.value:
            raise ForbiddenError("only admins can change user_type")

        if user_type not in {t.value for t in UserType}:
            raise BadRequestError(
                "user_type must be one of: " + ", ".join(t.value for t in UserType)
            )

        try:
            user = await self.users.update_user_type(user_id, user_type, self._clock())
        except RecordNotFoundError as e:
            raise NotFoundError("user not found") from e

        logger.info(
            "User type updated",
            actor_id=str(actor.user_id),
            target_user_id=str(user_id),
            user_type=user_type,
        )
        return user

    def _mint_pair(self, user: User) -> tuple[IssuedToken, IssuedToken]:
        return (
            self.issuer.mint_access(user.id, user.email, user.user_type),
            self.issuer.mint_refresh(user.id),
        )

    async def _record_session(
        self,
        user: User,
        access: IssuedToken,
        refresh: IssuedToken,
        client: ClientInfo,
        now: datetime,
    ) -> SessionTokens:
        await self.tokens.issue(
            user.id,
            refresh.token,
            refresh.expires_at,
            client.user_agent,
            client.ip,
            now,
        )
        return SessionTokens(
            access_token=access.token,
            refresh_token=refresh.token,
            expires_in=self.issuer.access_ttl_seconds,
            user=user,
        )
