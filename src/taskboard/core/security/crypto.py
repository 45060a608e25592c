"""Cryptographic utilities - password hashing and token hashing."""

from functools import lru_cache
from hashlib import sha256

import argon2

from src.taskboard.core.config import get_settings


def hash_token(token: str) -> str:
    """Hash a token using SHA256 for secure storage."""
    return sha256(token.encode()).hexdigest()


@lru_cache
def _password_hasher() -> argon2.PasswordHasher:
    """Create password hasher with settings from config."""
    settings = get_settings()
    return argon2.PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )


def hash_password(password: str) -> str:
    """Hash password using Argon2id."""
    return _password_hasher().hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify password against hash. Returns False on any error."""
    try:
        return _password_hasher().verify(hashed, password)
    except argon2.exceptions.VerifyMismatchError:
        return False
    except argon2.exceptions.InvalidHashError:
        return False


@lru_cache
def dummy_password_hash() -> str:
    """Hash verified against when the user is unknown, so login timing does not leak it."""
    return hash_password("taskboard-dummy-password")
