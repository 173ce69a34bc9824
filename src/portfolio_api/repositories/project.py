"""Repository for Project entity."""

from typing import Any

from sqlalchemy import case, func, update
from sqlmodel import select

from src.portfolio_api.models import Project
from src.portfolio_api.repositories.base import BaseRepository

FEATURED_LIMIT = 6


def _newest_first(query: Any) -> Any:
    return query.order_by(Project.created_at.desc(), Project.id.desc())  # type: ignore[union-attr]


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity."""

    model = Project

    async def list_all(self) -> list[Project]:
        """List every project, newest first."""
        result = await self.execute(_newest_first(select(Project)))
        return list(result.scalars().all())

    async def list_featured(self, limit: int = FEATURED_LIMIT) -> list[Project]:
        """List featured projects, newest first."""
        query = _newest_first(select(Project).where(Project.featured == True))  # noqa: E712
        result = await self.execute(query.limit(limit))
        return list(result.scalars().all())

    async def list_by_category(self, category: str) -> list[Project]:
        """List projects in a category (exact match), newest first."""
        query = _newest_first(select(Project).where(Project.category == category))
        result = await self.execute(query)
        return list(result.scalars().all())

    async def increment_views(self, project_id: int) -> int | None:
        """Atomically add one view and return the new count, or None if absent.

        A single ``UPDATE ... SET views = views + 1`` lets the database
        serialize concurrent increments; no read-modify-write in Python.
        """
        stmt = (
            update(Project)
            .where(Project.id == project_id)  # type: ignore[arg-type]
            .values(views=func.coalesce(Project.views, 0) + 1)
            .returning(Project.views)
            .execution_options(synchronize_session=False)
        )
        result = await self.execute(stmt)
        return result.scalar_one_or_none()

    async def dashboard_counts(self) -> dict[str, int]:
        """Return total projects, featured projects and the sum of all views."""
        featured_count = func.count(case((Project.featured == True, 1)))  # noqa: E712
        result = await self.execute(
            select(
                func.count(Project.id).label("total"),
                featured_count.label("featured"),
                func.coalesce(func.sum(Project.views), 0).label("views"),
            )
        )
        row = result.one()
        return {"total": int(row.total), "featured": int(row.featured), "views": int(row.views)}
