"""Rate limiting for the admin login endpoint.

Uses slowapi with in-memory storage (per process). The limit itself comes from
``LOGIN_RATE_LIMIT`` and is read at request time.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.portfolio_api.core.config import get_settings
from src.portfolio_api.core.logging import get_logger

logger = get_logger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Generate rate limit key from client IP only.

    Never include user-controlled headers in the key: rotating them would
    create unlimited new buckets and make the limit useless.
    """
    return get_remote_address(request) or "unknown"


def login_rate_limit() -> str:
    return get_settings().login_rate_limit


def create_limiter() -> Limiter:
    """Create the rate limiter. Disabled in the testing environment."""
    settings = get_settings()

    if settings.app_env == "testing":
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    logger.info("Rate limiter using in-memory backend (not distributed)")
    return Limiter(key_func=get_rate_limit_key)


# Note: This reads settings at import time. For dynamic reconfiguration,
# the app would need to be restarted.
limiter = create_limiter()
