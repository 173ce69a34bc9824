"""Integration test fixtures for database and HTTP client operations.

Tests run the real application against a throwaway SQLite file, so no
external services are needed. Tables are created before and dropped after
every test; uses polyfactory for test data generation.
"""

from collections.abc import AsyncGenerator, Generator
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlmodel import SQLModel

from src.portfolio_api.core.security import create_access_token
from src.portfolio_api.core.storage import InMemoryImageStorage
from src.portfolio_api.main import app as portfolio_app
from tests.factories import DEFAULT_TEST_PASSWORD, AdminUserFactory


@pytest.fixture
def app() -> FastAPI:
    return portfolio_app


@pytest.fixture
async def engine(app: FastAPI) -> AsyncGenerator[AsyncEngine]:
    """The application's engine with a fresh schema.

    The engine is disposed after each test: pooled aiosqlite connections are
    bound to the event loop that opened them.
    """
    test_engine: AsyncEngine = app.state.engine
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
async def db_session(app: FastAPI, engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for arranging and inspecting data.

    Tests must explicitly call ``await session.commit()`` to persist changes.
    """
    async with app.state.session_factory() as session:
        yield session


@pytest.fixture
def image_storage(app: FastAPI) -> Generator[InMemoryImageStorage]:
    """Swap the application's image storage for an in-memory double."""
    original = app.state.storage
    storage = InMemoryImageStorage(url_prefix=original.url_prefix)
    app.state.storage = storage
    yield storage
    app.state.storage = original


@pytest.fixture
async def client(app: FastAPI, engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def test_admin(db_session: AsyncSession) -> dict[str, Any]:
    """Create an admin account and return its credentials."""
    admin = AdminUserFactory.build()
    db_session.add(admin)
    await db_session.commit()
    await db_session.refresh(admin)

    return {
        "id": admin.id,
        "username": admin.username,
        "password": DEFAULT_TEST_PASSWORD,
        "name": admin.display_name,
    }


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Headers carrying a valid admin token.

    The token gate is stateless, so the admin does not need to exist.
    """
    token = create_access_token(1, "admin")
    return {"Authorization": f"Bearer {token}"}
