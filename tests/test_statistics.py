"""Unit tests for the notification statistics reductions."""

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from app.application.use_cases.notifications import (
    compute_listing_stats,
    compute_notification_stats,
)
from app.application.use_cases.notifications.statistics import read_rate
from app.domain.entities import NotificationSummary

NOW = datetime(2024, 5, 10, 12, 0, tzinfo=ZoneInfo("Asia/Kolkata"))


def _summary(
    *,
    category="General",
    priority="medium",
    is_active=True,
    sent=0,
    read=0,
    schedule_at=None,
    expiry_date=None,
    created_at=NOW,
):
    return NotificationSummary(
        category=category,
        priority=priority,
        is_active=is_active,
        sent_count=sent,
        read_count=read,
        schedule_at=schedule_at,
        expiry_date=expiry_date,
        created_at=created_at,
    )


def test_read_rate_is_zero_when_nothing_was_sent():
    assert read_rate(_summary(sent=0, read=0)) == 0
    assert read_rate(_summary(sent=4, read=1)) == pytest.approx(0.25)


def test_overview_counts_active_scheduled_and_expired():
    stats = compute_notification_stats(
        [
            _summary(),
            _summary(is_active=False),
            _summary(schedule_at=NOW + timedelta(days=1)),
            _summary(expiry_date=NOW - timedelta(hours=1)),
        ],
        now=NOW,
    )

    assert stats.overview.total == 4
    assert stats.overview.active == 3
    assert stats.overview.scheduled == 1
    assert stats.overview.expired == 1


def test_category_read_rate_is_mean_of_record_rates():
    stats = compute_notification_stats(
        [
            _summary(category="Exam", sent=2, read=2),
            _summary(category="Exam", sent=0, read=0),
            _summary(category="Fee", sent=4, read=1),
        ],
        now=NOW,
    )

    by_category = {item.category: item for item in stats.category_distribution}
    assert [item.category for item in stats.category_distribution] == ["Exam", "Fee"]
    assert by_category["Exam"].count == 2
    assert by_category["Exam"].read_rate == pytest.approx(0.5)
    assert by_category["Fee"].read_rate == pytest.approx(0.25)


def test_priorities_follow_severity_order():
    stats = compute_notification_stats(
        [_summary(priority="urgent"), _summary(priority="low"), _summary(priority="low")],
        now=NOW,
    )

    assert [(item.priority, item.count) for item in stats.priority_distribution] == [
        ("low", 2),
        ("urgent", 1),
    ]


def test_recent_activity_covers_last_seven_days_ascending():
    stats = compute_notification_stats(
        [
            _summary(created_at=NOW - timedelta(days=1), sent=3, read=2),
            _summary(created_at=NOW - timedelta(days=1)),
            _summary(created_at=NOW - timedelta(days=3)),
            _summary(created_at=NOW - timedelta(days=20)),
        ],
        now=NOW,
    )

    assert [(day.date, day.count) for day in stats.recent_activity] == [
        ("2024-05-07", 1),
        ("2024-05-09", 2),
    ]
    assert stats.recent_activity[1].read_count == 2


def test_empty_collection_produces_zeroes():
    stats = compute_notification_stats([], now=NOW)

    assert stats.overview.total == 0
    assert stats.category_distribution == []
    assert stats.recent_activity == []


def test_listing_stats_limits_recent_days():
    records = [_summary(created_at=NOW - timedelta(days=offset)) for offset in range(10)]
    records.append(_summary(category="Exam", created_at=NOW - timedelta(days=45)))

    stats = compute_listing_stats(records, now=NOW)

    assert stats.total == 11
    assert [(item.category, item.count) for item in stats.by_category] == [
        ("Exam", 1),
        ("General", 10),
    ]
    assert len(stats.recent) == 7
    assert stats.recent[0].date == "2024-05-01"
