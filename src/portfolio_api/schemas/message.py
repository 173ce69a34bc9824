"""Contact message schemas for API request/response."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from src.portfolio_api.schemas.pagination import PaginationMeta
from src.portfolio_api.schemas.stats import ListingStats


class ContactSubmission(BaseModel):
    """Public contact form payload.

    Every field is optional at the schema level; presence and format are
    checked by the message service so the client gets its usual 400 body.
    """

    name: str | None = None
    email: str | None = None
    message: str | None = None
    subject: str | None = None


class ContactSubmissionData(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime


class ContactSubmissionResponse(BaseModel):
    success: bool = True
    message: str
    data: ContactSubmissionData


class MessageRead(BaseModel):
    """Schema for reading a contact message."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    message: str
    subject: str
    status: str
    source: str
    ip_address: str | None
    user_agent: str | None
    read_at: datetime | None
    replied_at: datetime | None
    admin_notes: str | None
    created_at: datetime
    updated_at: datetime


class MessageUpdate(BaseModel):
    """Partial update. Use ``model_fields_set`` to tell omitted from null."""

    status: str | None = None
    admin_notes: str | None = None


class MessageListResponse(BaseModel):
    success: bool = True
    messages: list[MessageRead]
    pagination: PaginationMeta
    stats: ListingStats


class MessageDetailResponse(BaseModel):
    success: bool = True
    message: MessageRead


class MessageUpdateResponse(BaseModel):
    success: bool = True
    message: str
    data: MessageRead


class MessageDeleteResponse(BaseModel):
    success: bool = True
    message: str
