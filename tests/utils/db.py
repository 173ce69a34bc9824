"""Helpers for arranging rows in integration tests."""

from datetime import UTC, datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from src.portfolio_api.services.stats_service import local_midnight


async def persist[ModelType: SQLModel](
    session: AsyncSession, *entities: ModelType
) -> list[ModelType]:
    """Insert entities and return them with their generated IDs."""
    session.add_all(entities)
    await session.commit()
    for entity in entities:
        await session.refresh(entity)
    return list(entities)


async def reload[ModelType: SQLModel](
    session: AsyncSession, model: type[ModelType], id: int
) -> ModelType | None:
    """Read a row fresh from the database, bypassing the identity map."""
    return await session.get(model, id, populate_existing=True)


def before_local_midnight(**delta: float) -> datetime:
    """Naive UTC instant ``delta`` before today's local midnight."""
    return (local_midnight() - timedelta(**delta)).astimezone(UTC).replace(tzinfo=None)
