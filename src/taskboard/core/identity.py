"""Request-scoped identity produced by the authorization guard."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class RequestIdentity:
    """Identity decoded from a validated access token.

    Attributes:
        user_id: Subject of the token
        email: Email at the time the token was minted
        user_type: user_type at the time the token was minted. Authorization
            decisions that depend on it re-read the user store instead.
    """

    user_id: UUID
    email: str
    user_type: str


@dataclass(frozen=True)
class ClientInfo:
    """Device fingerprint recorded alongside each refresh token."""

    user_agent: str | None = None
    ip: str | None = None
