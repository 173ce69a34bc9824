"""Project service - public portfolio reads and admin maintenance."""

import asyncio

from src.portfolio_api.core.exceptions import InputValidationError, NotFoundError
from src.portfolio_api.core.logging import get_logger
from src.portfolio_api.core.security import parse_record_id
from src.portfolio_api.core.storage import ImageStorage
from src.portfolio_api.models import Project
from src.portfolio_api.models.base import utc_now
from src.portfolio_api.repositories import FEATURED_LIMIT, ProjectRepository
from src.portfolio_api.schemas.project import ProjectPayload

logger = get_logger(__name__)


def _required_text(value: str | None) -> str:
    return value.strip() if value else ""


def _optional_text(value: str | None) -> str | None:
    return value or None


class ProjectService:
    """Project service.

    ``replace`` is a destructive replace: every column is rewritten from
    the payload, so omitted fields are blanked rather than kept.
    """

    def __init__(self, project_repo: ProjectRepository, storage: ImageStorage):
        self.project_repo = project_repo
        self.storage = storage

    async def list_all(self) -> list[Project]:
        return await self.project_repo.list_all()

    async def featured(self) -> list[Project]:
        return await self.project_repo.list_featured(FEATURED_LIMIT)

    async def by_category(self, category: str) -> list[Project]:
        return await self.project_repo.list_by_category(category)

    async def get(self, raw_id: str) -> Project:
        project_id = parse_record_id(raw_id)
        if project_id is None:
            raise InputValidationError("Invalid project ID")

        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def get_and_count_view(self, raw_id: str) -> Project:
        """Fetch a project and count one view.

        The returned row is the one read before the increment, so its
        ``views`` lags the stored value by one.
        """
        project = await self.get(raw_id)
        await self.project_repo.increment_views(project.id)  # type: ignore[arg-type]
        await self.project_repo.commit()
        return project

    async def record_view(self, raw_id: str) -> int:
        """Count one view and return the new total."""
        project_id = parse_record_id(raw_id)
        if project_id is None:
            raise InputValidationError("Invalid project ID")

        views = await self.project_repo.increment_views(project_id)
        if views is None:
            raise NotFoundError("Project not found")
        await self.project_repo.commit()
        return views

    async def create(self, payload: ProjectPayload) -> Project:
        title = _required_text(payload.title)
        description = _required_text(payload.description)
        technologies = _required_text(payload.technologies)
        if not title or not description or not technologies:
            raise InputValidationError("Title, description, and technologies are required")

        project = Project(
            title=title,
            description=description,
            technologies=technologies,
            image_url=_optional_text(payload.image_url),
            project_url=_optional_text(payload.project_url),
            github_url=_optional_text(payload.github_url),
            category=_optional_text(payload.category),
            featured=payload.featured,
        )
        self.project_repo.add(project)
        await self.project_repo.commit()
        await self.project_repo.refresh(project)

        logger.info("Project created", project_id=project.id, title=project.title)
        return project

    async def replace(self, raw_id: str, payload: ProjectPayload) -> Project:
        project = await self.get(raw_id)

        project.title = _required_text(payload.title)
        project.description = _required_text(payload.description)
        project.technologies = _required_text(payload.technologies)
        project.image_url = _optional_text(payload.image_url)
        project.project_url = _optional_text(payload.project_url)
        project.github_url = _optional_text(payload.github_url)
        project.category = _optional_text(payload.category)
        project.featured = payload.featured
        project.updated_at = utc_now()

        await self.project_repo.commit()
        await self.project_repo.refresh(project)

        logger.info("Project replaced", project_id=project.id)
        return project

    async def delete(self, raw_id: str) -> int:
        """Delete a project, then try to remove its uploaded image.

        Returns the deleted project's ID. Image removal failures are logged
        and never fail the delete.
        """
        project = await self.get(raw_id)
        project_id: int = project.id  # type: ignore[assignment]
        image_url = project.image_url

        await self.project_repo.delete(project)
        await self.project_repo.commit()
        logger.info("Project deleted", project_id=project_id)

        if image_url:
            await self._remove_image(project_id, image_url)
        return project_id

    async def _remove_image(self, project_id: int, image_url: str) -> None:
        try:
            removed = await asyncio.to_thread(self.storage.delete, image_url)
        except (OSError, ValueError) as e:
            logger.warning(
                "Failed to remove project image",
                project_id=project_id,
                image_url=image_url,
                error=str(e),
            )
            return

        if not removed:
            logger.debug("No stored image to remove", project_id=project_id, image_url=image_url)
