"""Contact message model."""

from datetime import datetime

from sqlalchemy import DateTime, Index, Text
from sqlmodel import Field, SQLModel

from src.portfolio_api.models.base import utc_now
from src.portfolio_api.models.enums import MessageSource, MessageStatus

DEFAULT_SUBJECT = "General Inquiry"


class ContactMessage(SQLModel, table=True):
    """Message submitted through the public contact form.

    ``read_at`` is stamped the first time the status leaves ``unread`` and
    ``replied_at`` the first time it becomes ``replied``; neither is ever
    overwritten afterwards.
    """

    __tablename__ = "contact_messages"
    __table_args__ = (Index("ix_contact_messages_status_created_at", "status", "created_at"),)

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    email: str = Field(max_length=255, index=True)
    message: str = Field(sa_type=Text)
    subject: str = Field(default=DEFAULT_SUBJECT, max_length=200)
    status: str = Field(default=MessageStatus.UNREAD.value, max_length=20, index=True)
    source: str = Field(default=MessageSource.CONTACT_FORM.value, max_length=20)
    ip_address: str | None = Field(default=None, max_length=45)
    user_agent: str | None = Field(default=None, sa_type=Text)
    read_at: datetime | None = Field(default=None, sa_type=DateTime)
    replied_at: datetime | None = Field(default=None, sa_type=DateTime)
    admin_notes: str | None = Field(default=None, sa_type=Text)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
