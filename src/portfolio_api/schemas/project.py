"""Project schemas for API request/response."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProjectPayload(BaseModel):
    """Body of create and replace requests.

    Create requires title, description and technologies (checked by the
    service). Replace writes every column: whatever is omitted here is
    blanked, not preserved.
    """

    title: str | None = None
    description: str | None = None
    technologies: str | None = None
    image_url: str | None = None
    project_url: str | None = None
    github_url: str | None = None
    category: str | None = None
    featured: bool = False


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    technologies: str
    image_url: str | None
    project_url: str | None
    github_url: str | None
    category: str | None
    featured: bool
    views: int
    created_at: datetime
    updated_at: datetime


class ProjectMutationResponse(BaseModel):
    message: str
    project: ProjectRead


class ProjectDeleteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    deleted_id: int = Field(alias="deletedId")


class ProjectViewResponse(BaseModel):
    success: bool = True
    views: int
