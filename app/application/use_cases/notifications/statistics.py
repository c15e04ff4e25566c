"""Cross-notification statistics computed as pure reductions."""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from app.domain.entities import NOTIFICATION_PRIORITIES, NotificationSummary
from app.infrastructure.repositories import NotificationRepository
from app.utils import day_key, ensure_app_timezone, now_in_app_timezone

RECENT_ACTIVITY_DAYS = 7
LISTING_WINDOW_DAYS = 30
LISTING_DAY_LIMIT = 7


@dataclass
class StatsOverview:
    total: int
    active: int
    scheduled: int
    expired: int


@dataclass
class CategoryStat:
    category: str
    count: int
    read_rate: float


@dataclass
class PriorityStat:
    priority: str
    count: int


@dataclass
class DailyActivity:
    date: str
    count: int
    read_count: int = 0


@dataclass
class NotificationStats:
    """Dashboard statistics over the whole notification collection."""

    overview: StatsOverview
    category_distribution: list[CategoryStat]
    priority_distribution: list[PriorityStat]
    recent_activity: list[DailyActivity]


@dataclass
class CategoryCount:
    category: str
    count: int


@dataclass
class ListingStats:
    """Summary block returned alongside the paginated admin listing."""

    total: int
    by_category: list[CategoryCount]
    by_priority: list[PriorityStat]
    recent: list[DailyActivity]


def read_rate(summary: NotificationSummary) -> float:
    """Return ``read_count / sent_count``, or ``0`` when nothing was sent."""

    if summary.sent_count > 0:
        return summary.read_count / summary.sent_count
    return 0.0


def _priority_order(priority: str) -> tuple[int, str]:
    try:
        return (NOTIFICATION_PRIORITIES.index(priority), priority)
    except ValueError:
        return (len(NOTIFICATION_PRIORITIES), priority)


def _priority_distribution(records: Sequence[NotificationSummary]) -> list[PriorityStat]:
    counts = Counter(record.priority for record in records)
    return [
        PriorityStat(priority=priority, count=counts[priority])
        for priority in sorted(counts, key=_priority_order)
    ]


def _daily_activity(
    records: Iterable[NotificationSummary], *, since: datetime
) -> list[DailyActivity]:
    buckets: dict[str, DailyActivity] = {}
    for record in records:
        if record.created_at < since:
            continue
        key = day_key(record.created_at)
        bucket = buckets.setdefault(key, DailyActivity(date=key, count=0))
        bucket.count += 1
        bucket.read_count += record.read_count
    return [buckets[key] for key in sorted(buckets)]


def compute_notification_stats(
    records: Iterable[NotificationSummary], *, now: datetime
) -> NotificationStats:
    """Fold ``records`` into overview, distribution and recent activity figures."""

    now = ensure_app_timezone(now)
    items = list(records)

    overview = StatsOverview(
        total=len(items),
        active=sum(1 for record in items if record.is_active),
        scheduled=sum(
            1 for record in items if record.schedule_at is not None and record.schedule_at > now
        ),
        expired=sum(
            1 for record in items if record.expiry_date is not None and record.expiry_date < now
        ),
    )

    rates: defaultdict[str, list[float]] = defaultdict(list)
    for record in items:
        rates[record.category].append(read_rate(record))
    categories = [
        CategoryStat(category=category, count=len(values), read_rate=sum(values) / len(values))
        for category, values in rates.items()
    ]
    categories.sort(key=lambda stat: (-stat.count, stat.category))

    return NotificationStats(
        overview=overview,
        category_distribution=categories,
        priority_distribution=_priority_distribution(items),
        recent_activity=_daily_activity(
            items, since=now - timedelta(days=RECENT_ACTIVITY_DAYS)
        ),
    )


def compute_listing_stats(
    records: Iterable[NotificationSummary], *, now: datetime
) -> ListingStats:
    """Summary shown next to the admin listing: totals and the last days of activity."""

    now = ensure_app_timezone(now)
    items = list(records)
    category_counts = Counter(record.category for record in items)
    recent = _daily_activity(items, since=now - timedelta(days=LISTING_WINDOW_DAYS))
    return ListingStats(
        total=len(items),
        by_category=[
            CategoryCount(category=category, count=count)
            for category, count in sorted(category_counts.items())
        ],
        by_priority=_priority_distribution(items),
        recent=recent[:LISTING_DAY_LIMIT],
    )


def get_notification_stats(session: Session, *, now: datetime | None = None) -> NotificationStats:
    """Compute :class:`NotificationStats` over every stored notification."""

    reference = ensure_app_timezone(now) or now_in_app_timezone()
    summaries = NotificationRepository(session).list_summaries()
    return compute_notification_stats(summaries, now=reference)


__all__ = [
    "CategoryCount",
    "CategoryStat",
    "DailyActivity",
    "ListingStats",
    "NotificationStats",
    "PriorityStat",
    "StatsOverview",
    "compute_listing_stats",
    "compute_notification_stats",
    "get_notification_stats",
    "read_rate",
]
