"""Security utilities - crypto, headers and validators.

Re-exports all security-related functions for convenience.
"""

from src.portfolio_api.core.security.crypto import (
    ADMIN_ROLE,
    create_access_token,
    decode_token,
    get_dummy_password_hash,
    hash_password,
    verify_password,
)
from src.portfolio_api.core.security.headers import SecurityHeadersMiddleware
from src.portfolio_api.core.security.validators import (
    is_valid_email,
    normalize_email,
    parse_record_id,
    sanitize_filename,
)

__all__ = [
    # Crypto
    "ADMIN_ROLE",
    "create_access_token",
    "decode_token",
    "get_dummy_password_hash",
    "hash_password",
    "verify_password",
    # Headers
    "SecurityHeadersMiddleware",
    # Validators
    "is_valid_email",
    "normalize_email",
    "parse_record_id",
    "sanitize_filename",
]
