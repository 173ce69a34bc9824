"""Base repository with common CRUD operations."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.portfolio_api.core.exceptions import StorageFailureError
from src.portfolio_api.repositories.query import ListingQuery


@dataclass(frozen=True)
class Page[ModelType: SQLModel]:
    """One page of a listing plus the totals needed to navigate it."""

    items: list[ModelType]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        # ceil(total / limit) without floats
        return -(-self.total // self.limit)


@asynccontextmanager
async def storage_errors(operation: str) -> AsyncIterator[None]:
    """Translate SQLAlchemy failures (including pool timeouts) into StorageFailureError."""
    try:
        yield
    except SQLAlchemyError as e:
        raise StorageFailureError(detail=f"{operation} failed: {e}") from e


class BaseRepository[ModelType: SQLModel]:
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer, through :meth:`commit`.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def execute(self, statement: Any) -> Any:
        """Execute a statement, surfacing storage problems as StorageFailureError."""
        async with storage_errors(f"{self.model.__name__} query"):
            return await self.session.execute(statement)

    async def get_by_id(self, id: int) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def delete(self, entity: ModelType) -> None:
        """Mark entity for deletion (no commit)."""
        await self.session.delete(entity)

    async def commit(self) -> None:
        """Commit the unit of work; rolls back and raises StorageFailureError on failure."""
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StorageFailureError(detail=f"{self.model.__name__} commit failed: {e}") from e

    async def refresh(self, entity: ModelType) -> None:
        async with storage_errors(f"{self.model.__name__} refresh"):
            await self.session.refresh(entity)

    async def paginate(self, query: ListingQuery) -> Page[ModelType]:
        """Run the page and count statements of a listing query.

        Both statements carry the same rendered predicate, so ``total`` counts
        exactly the rows that paging through every page would return.
        """
        result = await self.execute(query.statement)
        items = list(result.scalars().all())

        count_result = await self.execute(query.count_statement)
        total = int(count_result.scalar_one())

        return Page(items=items, total=total, page=query.params.page, limit=query.params.limit)
