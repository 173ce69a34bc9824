"""Root test fixtures shared across all test types.

Environment variables are set here, before any application import, so the
cached settings, the rate limiter and the module-level app all see them.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os
import tempfile
from pathlib import Path

_TEST_ROOT = Path(tempfile.mkdtemp(prefix="portfolio-api-tests-"))

# Set APP_ENV to testing before any app imports to disable rate limiting
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TEST_ROOT / 'test.db'}")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-characters-long")
os.environ.setdefault("UPLOAD_DIR", str(_TEST_ROOT / "uploads"))
# Cheap hashing keeps the suite fast
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")

# ruff: noqa: E402 - Imports must be after env var setup
import pytest

from src.portfolio_api.core.config import get_settings

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def upload_root() -> Path:
    """Directory the application's local image storage writes to."""
    return Path(get_settings().upload_dir)
