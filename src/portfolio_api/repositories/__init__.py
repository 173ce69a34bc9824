"""Repository exports."""

from src.portfolio_api.repositories.admin import AdminUserRepository
from src.portfolio_api.repositories.base import BaseRepository, Page
from src.portfolio_api.repositories.message import (
    MESSAGE_SEARCH_COLUMNS,
    MESSAGE_SORT_COLUMNS,
    ContactMessageRepository,
    message_query_builder,
)
from src.portfolio_api.repositories.project import FEATURED_LIMIT, ProjectRepository
from src.portfolio_api.repositories.query import (
    Clause,
    Combinator,
    ListingParams,
    ListingQuery,
    ListingQueryBuilder,
    Operator,
    Predicate,
)

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    # Query building
    "Clause",
    "Combinator",
    "ListingParams",
    "ListingQuery",
    "ListingQueryBuilder",
    "Operator",
    "Predicate",
    # Entities
    "AdminUserRepository",
    "ContactMessageRepository",
    "MESSAGE_SEARCH_COLUMNS",
    "MESSAGE_SORT_COLUMNS",
    "message_query_builder",
    "FEATURED_LIMIT",
    "ProjectRepository",
]
