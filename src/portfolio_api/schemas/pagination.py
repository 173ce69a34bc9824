"""Pagination schemas for offset-based listings."""

from pydantic import BaseModel, Field


class PaginationMeta(BaseModel):
    """Where a page sits in the full result set.

    ``pages`` is ``ceil(total / limit)``, so it is 0 when nothing matches.
    """

    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    total: int = Field(ge=0)
    pages: int = Field(ge=0)
