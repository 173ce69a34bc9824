"""Shared enums for models."""

from enum import Enum


class MessageStatus(str, Enum):
    """Contact message handling status."""

    UNREAD = "unread"
    READ = "read"
    REPLIED = "replied"
    ARCHIVED = "archived"


class MessageSource(str, Enum):
    """Channel a contact message arrived through."""

    CONTACT_FORM = "contact_form"
    DIRECT_EMAIL = "direct_email"
    PHONE = "phone"
    OTHER = "other"
