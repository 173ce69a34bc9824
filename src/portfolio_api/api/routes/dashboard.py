"""Admin dashboard counters."""

from fastapi import APIRouter

from src.portfolio_api.api.dependencies import CurrentAdmin, StatsServiceDep
from src.portfolio_api.schemas.stats import DashboardStatsResponse

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse, summary="Dashboard totals")
async def dashboard_stats(
    _admin: CurrentAdmin, stats_service: StatsServiceDep
) -> DashboardStatsResponse:
    return DashboardStatsResponse(stats=await stats_service.dashboard())
