"""Aggregate statistics schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ListingStats(BaseModel):
    """Whole-table counts embedded in the message listing."""

    total: int
    unread: int
    replied: int
    today: int


class MessageStatsSummary(ListingStats):
    """Whole-table counts with day-granularity windows in server local time."""

    model_config = ConfigDict(populate_by_name=True)

    yesterday: int
    last_7_days: int = Field(alias="last7Days")
    last_30_days: int = Field(alias="last30Days")


class MessageStatsResponse(BaseModel):
    success: bool = True
    stats: MessageStatsSummary


class UnreadCountResponse(BaseModel):
    success: bool = True
    count: int


class DashboardStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_projects: int = Field(alias="totalProjects")
    featured_projects: int = Field(alias="featuredProjects")
    total_views: int = Field(alias="totalViews")
    total_messages: int = Field(alias="totalMessages")


class DashboardStatsResponse(BaseModel):
    success: bool = True
    stats: DashboardStats
