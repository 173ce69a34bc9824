"""Database utilities - engine, session, migrations."""

from src.portfolio_api.core.db.engine import create_engine_from_settings, dispose_engine
from src.portfolio_api.core.db.migrations import run_migrations_async, run_migrations_sync
from src.portfolio_api.core.db.session import create_session_factory, get_session

__all__ = [
    # Engine
    "create_engine_from_settings",
    "dispose_engine",
    # Session
    "create_session_factory",
    "get_session",
    # Migrations
    "run_migrations_async",
    "run_migrations_sync",
]
