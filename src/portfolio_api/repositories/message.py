"""Repository for ContactMessage entity."""

from datetime import datetime
from typing import Any

from sqlalchemy import case, func
from sqlmodel import select

from src.portfolio_api.models import ContactMessage, MessageStatus
from src.portfolio_api.repositories.base import BaseRepository, Page
from src.portfolio_api.repositories.query import ListingParams, ListingQueryBuilder

MESSAGE_SORT_COLUMNS = ("created_at", "name", "status")
MESSAGE_SEARCH_COLUMNS = ("name", "email", "message")

message_query_builder = ListingQueryBuilder(
    ContactMessage,
    sortable_columns=MESSAGE_SORT_COLUMNS,
    search_columns=MESSAGE_SEARCH_COLUMNS,
)


def _count_where(condition: Any) -> Any:
    # COUNT ignores NULLs, so this counts rows matching the condition
    return func.count(case((condition, 1)))


class ContactMessageRepository(BaseRepository[ContactMessage]):
    """Repository for ContactMessage entity."""

    model = ContactMessage

    async def list_page(self, params: ListingParams) -> Page[ContactMessage]:
        """List messages matching the filters in ``params``."""
        return await self.paginate(message_query_builder.build(params))

    async def count_by_status(self, status: MessageStatus) -> int:
        result = await self.execute(
            select(func.count()).select_from(ContactMessage).where(
                ContactMessage.status == status.value
            )
        )
        return int(result.scalar_one())

    async def count_all(self) -> int:
        result = await self.execute(select(func.count()).select_from(ContactMessage))
        return int(result.scalar_one())

    async def aggregate_counts(
        self, windows: dict[str, tuple[datetime, datetime | None]]
    ) -> dict[str, int]:
        """Count total, unread and replied messages plus one count per time window.

        Args:
            windows: Name -> ``(start, end)`` half-open interval on ``created_at``;
                     ``end`` may be None for an open-ended window.

        Returns:
            Dict with ``total``, ``unread``, ``replied`` and one key per window.
        """
        created_at = ContactMessage.created_at
        columns = [
            func.count().label("total"),
            _count_where(ContactMessage.status == MessageStatus.UNREAD.value).label("unread"),
            _count_where(ContactMessage.status == MessageStatus.REPLIED.value).label("replied"),
        ]
        for name, (start, end) in windows.items():
            condition = created_at >= start
            if end is not None:
                condition = condition & (created_at < end)
            columns.append(_count_where(condition).label(name))

        result = await self.execute(select(*columns).select_from(ContactMessage))
        row = result.one()
        return {key: int(value or 0) for key, value in row._mapping.items()}
