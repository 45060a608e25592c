"""Store-level failures.

These never reach a client directly; services translate them into the
application error taxonomy (``src.taskboard.core.errors``).
"""

from sqlalchemy.exc import IntegrityError


class StoreError(Exception):
    """Base class for store failures."""


class RecordNotFoundError(StoreError):
    """The addressed row does not exist (or no row was changed)."""


class LedgerValidationError(StoreError, ValueError):
    """A refresh token record was rejected before being written."""


class TokenLookupError(StoreError):
    """A refresh token hash did not resolve to an active ledger record."""

    reason: str = "invalid"


class TokenNotFoundError(TokenLookupError, RecordNotFoundError):
    reason = "not_found"


class TokenRevokedError(TokenLookupError):
    reason = "revoked"


class TokenExpiredError(TokenLookupError):
    reason = "expired"


def violated_constraint(error: IntegrityError) -> str | None:
    """Name of the constraint or unique index behind ``error``, when the driver reports it.

    asyncpg puts ``constraint_name`` on its own exception, which SQLAlchemy's
    DBAPI adapter keeps as the ``__cause__`` of ``error.orig``.
    """
    cause: BaseException | None = error.orig
    while cause is not None:
        name = getattr(cause, "constraint_name", None)
        if name:
            return str(name)
        cause = cause.__cause__
    return None
