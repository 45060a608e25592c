"""Authorization guard."""

from typing import Annotated

from fastapi import Depends, Header, Request

from src.taskboard.core.errors import UnauthorizedError
from src.taskboard.core.identity import RequestIdentity
from src.taskboard.core.logging import bind_user_context, get_logger
from src.taskboard.core.security import TokenInvalidError, TokenIssuer

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


def get_token_issuer(request: Request) -> TokenIssuer:
    """Token issuer built once at startup by create_app()."""
    issuer: TokenIssuer = request.app.state.token_issuer
    return issuer


TokenIssuerDep = Annotated[TokenIssuer, Depends(get_token_issuer)]


async def get_request_identity(
    issuer: TokenIssuerDep,
    authorization: Annotated[str | None, Header()] = None,
) -> RequestIdentity:
    """Authenticate the request from its ``Authorization: Bearer <token>`` header.

    Only the access token is checked (signature and claims); the refresh
    token ledger and the database are never consulted. Every failure is the
    same 401 so the response does not say what was wrong.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise UnauthorizedError("missing or invalid authorization header")

    token = authorization[len(BEARER_PREFIX) :]
    if not token or token != token.strip():
        raise UnauthorizedError("missing or invalid authorization header")

    try:
        claims = issuer.validate_access(token)
    except TokenInvalidError as e:
        logger.debug("Access token rejected", error=str(e))
        raise UnauthorizedError("invalid or expired token") from e

    identity = RequestIdentity(
        user_id=claims.user_id,
        email=claims.email or "",
        user_type=claims.user_type or "",
    )
    bind_user_context(identity.user_id, identity.user_type, identity.email)
    return identity


CurrentIdentity = Annotated[RequestIdentity, Depends(get_request_identity)]
