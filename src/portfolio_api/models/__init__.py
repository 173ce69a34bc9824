"""Model exports.

Import from here: `from src.portfolio_api.models import ContactMessage, Project`
"""

from src.portfolio_api.models.admin import AdminUser
from src.portfolio_api.models.enums import MessageSource, MessageStatus
from src.portfolio_api.models.message import DEFAULT_SUBJECT, ContactMessage
from src.portfolio_api.models.project import Project

__all__ = [
    # Enums
    "MessageSource",
    "MessageStatus",
    # Models
    "AdminUser",
    "ContactMessage",
    "DEFAULT_SUBJECT",
    "Project",
]
