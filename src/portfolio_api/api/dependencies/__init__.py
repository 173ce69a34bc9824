"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenience.
"""

# Auth
from src.portfolio_api.api.dependencies.auth import CurrentAdmin, get_current_admin

# Database
from src.portfolio_api.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.portfolio_api.api.dependencies.repositories import (
    AdminRepo,
    MessageRepo,
    ProjectRepo,
    get_admin_repository,
    get_message_repository,
    get_project_repository,
)

# Services
from src.portfolio_api.api.dependencies.services import (
    AuthServiceDep,
    MessageServiceDep,
    ProjectServiceDep,
    StatsServiceDep,
    UploadServiceDep,
    get_auth_service,
    get_message_service,
    get_project_service,
    get_stats_service,
    get_upload_service,
)

# Application state
from src.portfolio_api.api.dependencies.state import (
    AppSettings,
    Storage,
    get_app_settings,
    get_image_storage,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Application state
    "AppSettings",
    "Storage",
    "get_app_settings",
    "get_image_storage",
    # Auth
    "CurrentAdmin",
    "get_current_admin",
    # Repositories
    "AdminRepo",
    "MessageRepo",
    "ProjectRepo",
    "get_admin_repository",
    "get_message_repository",
    "get_project_repository",
    # Services
    "AuthServiceDep",
    "MessageServiceDep",
    "ProjectServiceDep",
    "StatsServiceDep",
    "UploadServiceDep",
    "get_auth_service",
    "get_message_service",
    "get_project_service",
    "get_stats_service",
    "get_upload_service",
]
