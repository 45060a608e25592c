"""JWT access/refresh token issuer.

Access and refresh tokens are signed with two independent secrets. Access
tokens carry the identity claims (user_id, email, user_type); refresh tokens
carry only user_id and are additionally checked against the refresh token
ledger by the auth service.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID, uuid4

from jose import JWTError, jwt

from src.taskboard.core.config import Settings


class TokenType:
    """Token type constants (the ``type`` claim)."""

    ACCESS = "access"
    REFRESH = "refresh"


class TokenInvalidError(Exception):
    """Raised for any token that fails signature, envelope or claim checks."""


@dataclass(frozen=True)
class TokenConfig:
    access_secret: str
    refresh_secret: str
    issuer: str
    audience: str
    access_ttl: timedelta = timedelta(minutes=15)
    refresh_ttl: timedelta = timedelta(days=7)
    leeway: timedelta = timedelta(seconds=30)
    algorithm: str = "HS256"

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenConfig":
        return cls(
            access_secret=settings.jwt_access_secret,
            refresh_secret=settings.jwt_refresh_secret,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            access_ttl=settings.access_token_ttl,
            refresh_ttl=settings.refresh_token_ttl,
            leeway=timedelta(seconds=settings.jwt_leeway_seconds),
            algorithm=settings.jwt_algorithm,
        )


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime  # naive UTC, matches database columns

    def expires_in(self, issued_at: datetime) -> int:
        return int((self.expires_at - issued_at).total_seconds())


@dataclass(frozen=True)
class TokenClaims:
    user_id: UUID
    token_type: str
    issued_at: datetime
    expires_at: datetime
    token_id: str
    email: str | None = None
    user_type: str | None = None


def _aware_utc_now() -> datetime:
    return datetime.now(UTC)


class TokenIssuer:
    """Mints and validates signed access and refresh tokens."""

    def __init__(self, config: TokenConfig, clock: Callable[[], datetime] = _aware_utc_now):
        self.config = config
        self._clock = clock

    @property
    def access_ttl_seconds(self) -> int:
        return int(self.config.access_ttl.total_seconds())

    def mint_access(self, user_id: UUID, email: str, user_type: str) -> IssuedToken:
        return self._mint(
            user_id,
            TokenType.ACCESS,
            self.config.access_secret,
            self.config.access_ttl,
            {"email": email, "user_type": user_type},
        )

    def mint_refresh(self, user_id: UUID) -> IssuedToken:
        return self._mint(
            user_id,
            TokenType.REFRESH,
            self.config.refresh_secret,
            self.config.refresh_ttl,
            {},
        )

    def validate_access(self, token: str) -> TokenClaims:
        claims = self._decode(token, self.config.access_secret, TokenType.ACCESS)
        email = claims.get("email")
        user_type = claims.get("user_type")
        if not isinstance(email, str) or not isinstance(user_type, str):
            raise TokenInvalidError("access token is missing identity claims")
        return self._to_claims(claims, email=email, user_type=user_type)

    def validate_refresh(self, token: str) -> TokenClaims:
        claims = self._decode(token, self.config.refresh_secret, TokenType.REFRESH)
        return self._to_claims(claims)

    def _mint(
        self,
        user_id: UUID,
        token_type: str,
        secret: str,
        ttl: timedelta,
        extra_claims: dict[str, Any],
    ) -> IssuedToken:
        now = self._clock()
        expires_at = now + ttl
        to_encode: dict[str, Any] = {
            "sub": str(user_id),
            "iss": self.config.issuer,
            "aud": [self.config.audience],
            "iat": now,
            "nbf": now,
            "exp": expires_at,
            "jti": uuid4().hex,  # Unique per token, ledger hashes must never collide
            "type": token_type,
            "user_id": str(user_id),
            **extra_claims,
        }
        token: str = jwt.encode(to_encode, secret, algorithm=self.config.algorithm)
        return IssuedToken(token=token, expires_at=expires_at.replace(tzinfo=None))

    def _decode(self, token: str, secret: str, expected_type: str) -> dict[str, Any]:
        if not token:
            raise TokenInvalidError("empty token")
        try:
            claims: dict[str, Any] = jwt.decode(
                token,
                secret,
                algorithms=[self.config.algorithm],
                audience=self.config.audience,
                issuer=self.config.issuer,
                options={
                    "leeway": int(self.config.leeway.total_seconds()),
                    "require_exp": True,
                    "require_iat": True,
                    "require_sub": True,
                },
            )
        except JWTError as e:
            raise TokenInvalidError(str(e)) from e
        if claims.get("type") != expected_type:
            raise TokenInvalidError("unexpected token type")
        return claims

    @staticmethod
    def _to_claims(
        claims: dict[str, Any], email: str | None = None, user_type: str | None = None
    ) -> TokenClaims:
        try:
            user_id = UUID(str(claims.get("user_id")))
        except ValueError as e:
            raise TokenInvalidError("invalid user_id claim") from e
        if str(user_id) != claims.get("sub"):
            raise TokenInvalidError("subject does not match user_id")
        return TokenClaims(
            user_id=user_id,
            token_type=claims["type"],
            issued_at=datetime.fromtimestamp(claims["iat"], UTC).replace(tzinfo=None),
            expires_at=datetime.fromtimestamp(claims["exp"], UTC).replace(tzinfo=None),
            token_id=str(claims.get("jti", "")),
            email=email,
            user_type=user_type,
        )
