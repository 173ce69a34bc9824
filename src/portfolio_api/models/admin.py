"""Admin user model - managed by the seed script, read-only for the API."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from src.portfolio_api.models.base import utc_now


class AdminUser(SQLModel, table=True):
    __tablename__ = "admin_users"

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(max_length=50, unique=True, index=True)
    email: str | None = Field(default=None, max_length=255)
    password_hash: str = Field(max_length=255)
    full_name: str | None = Field(default=None, max_length=100)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)

    @property
    def display_name(self) -> str:
        return self.full_name or self.username
