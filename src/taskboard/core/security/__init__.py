"""Security utilities - password/token hashing and the JWT token issuer.

Re-exports all security-related names for convenience.
"""

from src.taskboard.core.security.crypto import (
    dummy_password_hash,
    hash_password,
    hash_token,
    verify_password,
)
from src.taskboard.core.security.tokens import (
    IssuedToken,
    TokenClaims,
    TokenConfig,
    TokenInvalidError,
    TokenIssuer,
    TokenType,
)

__all__ = [
    # Crypto
    "dummy_password_hash",
    "hash_password",
    "hash_token",
    "verify_password",
    # Tokens
    "IssuedToken",
    "TokenClaims",
    "TokenConfig",
    "TokenInvalidError",
    "TokenIssuer",
    "TokenType",
]
