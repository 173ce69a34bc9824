"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.portfolio_api.api.dependencies.db import DBSession
from src.portfolio_api.repositories import (
    AdminUserRepository,
    ContactMessageRepository,
    ProjectRepository,
)


def get_admin_repository(session: DBSession) -> AdminUserRepository:
    return AdminUserRepository(session)


def get_message_repository(session: DBSession) -> ContactMessageRepository:
    return ContactMessageRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


AdminRepo = Annotated[AdminUserRepository, Depends(get_admin_repository)]
MessageRepo = Annotated[ContactMessageRepository, Depends(get_message_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
