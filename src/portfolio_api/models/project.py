"""Portfolio project model."""

from datetime import datetime

from sqlalchemy import DateTime, Text
from sqlmodel import Field, SQLModel

from src.portfolio_api.models.base import utc_now


class Project(SQLModel, table=True):
    """Portfolio entry. ``views`` only ever goes up."""

    __tablename__ = "projects"

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(max_length=200)
    description: str = Field(sa_type=Text)
    technologies: str = Field(sa_type=Text)
    image_url: str | None = Field(default=None, max_length=500)
    project_url: str | None = Field(default=None, max_length=500)
    github_url: str | None = Field(default=None, max_length=500)
    category: str | None = Field(default=None, max_length=100, index=True)
    featured: bool = Field(default=False, index=True)
    views: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
