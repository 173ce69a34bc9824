"""Cryptographic utilities - password hashing and JWT access tokens."""

from datetime import UTC, datetime, timedelta
from typing import Any

import argon2
from jose import JWTError, jwt

from src.portfolio_api.core.config import get_settings

ADMIN_ROLE = "admin"


def _create_password_hasher() -> argon2.PasswordHasher:
    """Create password hasher with settings from config."""
    settings = get_settings()
    return argon2.PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )


_password_hasher: argon2.PasswordHasher | None = None


def _get_password_hasher() -> argon2.PasswordHasher:
    global _password_hasher
    if _password_hasher is None:
        _password_hasher = _create_password_hasher()
    return _password_hasher


def hash_password(password: str) -> str:
    """Hash password using Argon2id."""
    return _get_password_hasher().hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify password against hash. Returns False on any error."""
    try:
        _get_password_hasher().verify(hashed, password)
        return True
    except argon2.exceptions.VerifyMismatchError:
        return False
    except argon2.exceptions.InvalidHashError:
        return False


_dummy_password_hash: str | None = None


def get_dummy_password_hash() -> str:
    """Hash verified against when the username is unknown, so both paths cost the same."""
    global _dummy_password_hash
    if _dummy_password_hash is None:
        _dummy_password_hash = hash_password("portfolio-api-dummy-password")
    return _dummy_password_hash


def create_access_token(
    admin_id: int,
    username: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed admin access token."""
    settings = get_settings()

    if expires_delta:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode = {
        "sub": str(admin_id),
        "id": admin_id,
        "username": username,
        "role": ADMIN_ROLE,
        "exp": expire,
    }
    return jwt.encode(  # type: ignore[no-any-return]
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate JWT token. Returns None on any error, including expiry."""
    settings = get_settings()
    try:
        return jwt.decode(  # type: ignore[no-any-return]
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None
