"""Use case for retrieving a single notification with engagement figures."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import NotificationRepository


@dataclass
class EngagementStats:
    """Per-notification engagement counts."""

    total_receivers: int
    read_count: int
    ack_count: int
    read_percentage: float


def engagement_stats(notification: Notification) -> EngagementStats:
    total = len(notification.receivers)
    read = sum(1 for receiver in notification.receivers if receiver.read)
    acknowledged = sum(1 for entry in notification.ack_receivers if entry.acknowledged)
    percentage = round(read / total * 100, 2) if total > 0 else 0.0
    return EngagementStats(
        total_receivers=total,
        read_count=read,
        ack_count=acknowledged,
        read_percentage=percentage,
    )


def get_notification(session: Session, notification_id: int) -> Notification:
    """Return the notification identified by ``notification_id`` or raise."""

    notification = NotificationRepository(session).get(notification_id)
    if notification is None:
        raise NotFoundError("Notification not found")
    return notification


__all__ = ["EngagementStats", "engagement_stats", "get_notification"]
