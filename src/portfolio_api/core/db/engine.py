"""Database engine management."""

import ssl
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.portfolio_api.core.config import Settings


def _get_connect_args(settings: Settings) -> dict[str, Any]:
    """Get asyncpg connection arguments including SSL configuration."""
    connect_args: dict[str, Any] = {
        "statement_cache_size": settings.database_statement_cache_size,
    }

    ssl_mode = settings.database_ssl_mode
    if ssl_mode != "disable":
        ssl_context = ssl.create_default_context()
        if ssl_mode == "prefer" or ssl_mode == "require":
            ssl_context.check_hostname = False
            ssl_context.verify_mode = ssl.CERT_NONE
        elif ssl_mode in ("verify-ca", "verify-full"):
            ssl_context.check_hostname = ssl_mode == "verify-full"
            ssl_context.verify_mode = ssl.CERT_REQUIRED
        connect_args["ssl"] = ssl_context

    return connect_args


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database.

    PostgreSQL gets a bounded pool: once ``pool_size + max_overflow`` connections
    are checked out, callers wait up to ``pool_timeout`` seconds for one to be
    returned before SQLAlchemy raises a ``TimeoutError``.
    """
    url = make_url(settings.database_url)

    if url.get_backend_name() == "sqlite":
        # SQLite picks its own pool class; pool sizing arguments do not apply
        return create_async_engine(settings.database_url)

    return create_async_engine(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_timeout=settings.database_pool_timeout,
        pool_pre_ping=True,
        connect_args=_get_connect_args(settings),
    )


async def dispose_engine(engine: AsyncEngine | None) -> None:
    """Dispose the database engine. Call during shutdown."""
    if engine is not None:
        await engine.dispose()
