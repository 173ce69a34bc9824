"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.portfolio_api.api.dependencies.repositories import AdminRepo, MessageRepo, ProjectRepo
from src.portfolio_api.api.dependencies.state import AppSettings, Storage
from src.portfolio_api.services import (
    AuthService,
    MessageService,
    ProjectService,
    StatsService,
    UploadService,
)


def get_auth_service(admin_repo: AdminRepo) -> AuthService:
    return AuthService(admin_repo)


def get_stats_service(message_repo: MessageRepo, project_repo: ProjectRepo) -> StatsService:
    return StatsService(message_repo, project_repo)


StatsServiceDep = Annotated[StatsService, Depends(get_stats_service)]


def get_message_service(
    message_repo: MessageRepo, stats_service: StatsServiceDep
) -> MessageService:
    return MessageService(message_repo, stats_service)


def get_project_service(project_repo: ProjectRepo, storage: Storage) -> ProjectService:
    return ProjectService(project_repo, storage)


def get_upload_service(storage: Storage, settings: AppSettings) -> UploadService:
    return UploadService(storage, max_bytes=settings.upload_max_bytes)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
UploadServiceDep = Annotated[UploadService, Depends(get_upload_service)]
