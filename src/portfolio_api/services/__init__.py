"""Service layer exports."""

from src.portfolio_api.services.auth_service import AuthService
from src.portfolio_api.services.message_service import MessageService
from src.portfolio_api.services.project_service import ProjectService
from src.portfolio_api.services.stats_service import StatsService
from src.portfolio_api.services.upload_service import UploadService

__all__ = [
    "AuthService",
    "MessageService",
    "ProjectService",
    "StatsService",
    "UploadService",
]
