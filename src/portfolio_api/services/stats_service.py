"""Aggregate statistics over contact messages and projects."""

from datetime import UTC, datetime, timedelta

from src.portfolio_api.models import MessageStatus
from src.portfolio_api.repositories import ContactMessageRepository, ProjectRepository
from src.portfolio_api.schemas.stats import DashboardStats, ListingStats, MessageStatsSummary

TimeWindows = dict[str, tuple[datetime, datetime | None]]


def _to_naive_utc(value: datetime) -> datetime:
    # created_at is stored as naive UTC
    return value.astimezone(UTC).replace(tzinfo=None)


def local_midnight(now: datetime | None = None) -> datetime:
    """Start of the current calendar day in the server's local timezone.

    A naive ``now`` is taken to be local time.
    """
    local_now = (now or datetime.now()).astimezone()
    return local_now.replace(hour=0, minute=0, second=0, microsecond=0)


def day_windows(now: datetime | None = None) -> TimeWindows:
    """Half-open ``[start, end)`` windows on ``created_at``, as naive UTC.

    ``today`` starts at local midnight, ``yesterday`` is the whole prior
    calendar day, and the 7/30 day windows reach back from local midnight.
    """
    today_start = local_midnight(now)
    yesterday_start = today_start - timedelta(days=1)
    return {
        "today": (_to_naive_utc(today_start), None),
        "yesterday": (_to_naive_utc(yesterday_start), _to_naive_utc(today_start)),
        "last_7_days": (_to_naive_utc(today_start - timedelta(days=7)), None),
        "last_30_days": (_to_naive_utc(today_start - timedelta(days=30)), None),
    }


class StatsService:
    """Read-only counts, always computed over whole tables."""

    def __init__(
        self,
        message_repo: ContactMessageRepository,
        project_repo: ProjectRepository,
    ):
        self.message_repo = message_repo
        self.project_repo = project_repo

    async def summary(self, now: datetime | None = None) -> MessageStatsSummary:
        """Status counts plus day-granularity windows, in one aggregate query."""
        counts = await self.message_repo.aggregate_counts(day_windows(now))
        return MessageStatsSummary(**counts)

    async def listing_stats(self, now: datetime | None = None) -> ListingStats:
        """The subset of the summary embedded in message listings."""
        windows = day_windows(now)
        counts = await self.message_repo.aggregate_counts({"today": windows["today"]})
        return ListingStats(**counts)

    async def unread_count(self) -> int:
        return await self.message_repo.count_by_status(MessageStatus.UNREAD)

    async def dashboard(self) -> DashboardStats:
        project_counts = await self.project_repo.dashboard_counts()
        total_messages = await self.message_repo.count_all()
        return DashboardStats(
            total_projects=project_counts["total"],
            featured_projects=project_counts["featured"],
            total_views=project_counts["views"],
            total_messages=total_messages,
        )
