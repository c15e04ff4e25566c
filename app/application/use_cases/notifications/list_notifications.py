"""Use case for the paginated administrative notification listing."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import STATUS_ACTIVE, STATUS_EXPIRED, STATUS_SCHEDULED, Notification
from app.domain.exceptions import ValidationError
from app.infrastructure.repositories import NotificationFilters, NotificationRepository
from app.utils import ensure_app_timezone, now_in_app_timezone

from .statistics import ListingStats, compute_listing_stats

_STATUSES = (STATUS_ACTIVE, STATUS_EXPIRED, STATUS_SCHEDULED)


@dataclass
class Pagination:
    page: int
    limit: int
    total: int
    pages: int


@dataclass
class NotificationPage:
    notifications: list[Notification]
    pagination: Pagination
    stats: ListingStats


def list_notifications(
    session: Session,
    *,
    category: str | None = None,
    priority: str | None = None,
    status: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    page: int = 1,
    limit: int = 20,
) -> NotificationPage:
    """Return one page of notifications, newest first, with listing statistics."""

    if status and status not in _STATUSES:
        raise ValidationError(f"Invalid status '{status}'")
    if page < 1 or limit < 1:
        raise ValidationError("page and limit must be positive integers")
    if start_date and end_date and ensure_app_timezone(start_date) > ensure_app_timezone(end_date):
        raise ValidationError("start_date must not be after end_date")

    now = now_in_app_timezone()
    repository = NotificationRepository(session)
    filters = NotificationFilters(
        category=category,
        priority=priority,
        status=status,
        start_date=start_date,
        end_date=end_date,
    )
    items, total = repository.list(filters, now=now, skip=(page - 1) * limit, limit=limit)

    # Totals cover the whole collection; only the daily series is windowed.
    stats = compute_listing_stats(repository.list_summaries(), now=now)
    return NotificationPage(
        notifications=items,
        pagination=Pagination(
            page=page, limit=limit, total=total, pages=math.ceil(total / limit)
        ),
        stats=stats,
    )


__all__ = ["NotificationPage", "Pagination", "list_notifications"]
