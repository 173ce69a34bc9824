"""Contact message service - public submissions and the admin inbox."""

from src.portfolio_api.core.exceptions import InputValidationError, NotFoundError
from src.portfolio_api.core.logging import get_logger
from src.portfolio_api.core.security import is_valid_email, normalize_email, parse_record_id
from src.portfolio_api.models import ContactMessage, MessageSource, MessageStatus
from src.portfolio_api.models.base import utc_now
from src.portfolio_api.models.message import DEFAULT_SUBJECT
from src.portfolio_api.repositories import ContactMessageRepository, ListingParams, Page
from src.portfolio_api.schemas.message import ContactSubmission, MessageUpdate
from src.portfolio_api.schemas.stats import ListingStats
from src.portfolio_api.services.stats_service import StatsService

logger = get_logger(__name__)


def _clean(value: str | None) -> str:
    return value.strip() if value else ""


class MessageService:
    """Message service - handles contact form submissions and message triage.

    Status transitions stamp ``read_at`` the first time a message leaves
    ``unread`` and ``replied_at`` the first time it becomes ``replied``.
    """

    def __init__(self, message_repo: ContactMessageRepository, stats_service: StatsService):
        self.message_repo = message_repo
        self.stats_service = stats_service

    async def submit(
        self,
        payload: ContactSubmission,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> ContactMessage:
        """Validate and store a contact form submission."""
        name = _clean(payload.name)
        email = _clean(payload.email)
        body = _clean(payload.message)

        if not name or not email or not body:
            raise InputValidationError("Name, email, and message are required")
        if not is_valid_email(email):
            raise InputValidationError("Invalid email format")

        message = ContactMessage(
            name=name,
            email=normalize_email(email),
            message=body,
            subject=_clean(payload.subject) or DEFAULT_SUBJECT,
            status=MessageStatus.UNREAD.value,
            source=MessageSource.CONTACT_FORM.value,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self.message_repo.add(message)
        await self.message_repo.commit()
        await self.message_repo.refresh(message)

        logger.info("Contact message submitted", message_id=message.id, ip_address=ip_address)
        return message

    async def list_messages(
        self, params: ListingParams
    ) -> tuple[Page[ContactMessage], ListingStats]:
        """One page of the inbox plus whole-table counts."""
        page = await self.message_repo.list_page(params)
        stats = await self.stats_service.listing_stats()
        return page, stats

    async def get(self, raw_id: str) -> ContactMessage:
        message_id = parse_record_id(raw_id)
        if message_id is None:
            raise InputValidationError("Invalid message ID")

        message = await self.message_repo.get_by_id(message_id)
        if message is None:
            raise NotFoundError("Message not found")
        return message

    async def get_and_mark_read(self, raw_id: str) -> ContactMessage:
        """Fetch a message, upgrading it from unread to read.

        Two concurrent first reads can both see ``unread``; both then write
        ``read`` and differ only in the ``read_at`` instant.
        """
        message = await self.get(raw_id)
        if message.status == MessageStatus.UNREAD.value:
            now = utc_now()
            message.status = MessageStatus.READ.value
            message.read_at = now
            message.updated_at = now
            await self.message_repo.commit()
            await self.message_repo.refresh(message)
            logger.info("Message marked read", message_id=message.id)
        return message

    async def update(self, raw_id: str, changes: MessageUpdate) -> ContactMessage:
        """Apply a partial update of status and/or admin notes.

        ``admin_notes`` may be explicitly set to null; an empty or null
        status counts as not provided.
        """
        new_status: MessageStatus | None = None
        if changes.status:
            try:
                new_status = MessageStatus(changes.status)
            except ValueError as e:
                raise InputValidationError("Invalid status") from e

        notes_provided = "admin_notes" in changes.model_fields_set
        if new_status is None and not notes_provided:
            raise InputValidationError("No fields to update")

        message = await self.get(raw_id)
        now = utc_now()

        if new_status is not None:
            message.status = new_status.value
            if new_status is not MessageStatus.UNREAD and message.read_at is None:
                message.read_at = now
            if new_status is MessageStatus.REPLIED and message.replied_at is None:
                message.replied_at = now

        if notes_provided:
            message.admin_notes = changes.admin_notes

        message.updated_at = now
        await self.message_repo.commit()
        await self.message_repo.refresh(message)

        logger.info(
            "Message updated",
            message_id=message.id,
            status=message.status,
            notes_updated=notes_provided,
        )
        return message

    async def delete(self, raw_id: str) -> None:
        message = await self.get(raw_id)
        await self.message_repo.delete(message)
        await self.message_repo.commit()
        logger.info("Message deleted", message_id=message.id)
