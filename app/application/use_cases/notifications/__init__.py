"""Use cases for targeting, delivering and reporting on notifications."""

from .audience import coerce_target_ids, load_directory_snapshot, resolve_audience
from .create_notification import create_notification
from .delete_notification import delete_notification
from .dispatcher import (
    EVENT_NOTIFICATION_CREATED,
    LiveSessionBroadcaster,
    dispatch_notification_created,
    serialize_notification_event,
)
from .engagement import acknowledge, list_for_recipient, mark_many_read, mark_read
from .get_notification import EngagementStats, engagement_stats, get_notification
from .list_notifications import NotificationPage, Pagination, list_notifications
from .send_notification import SendResult, send_notification_now
from .statistics import (
    NotificationStats,
    compute_listing_stats,
    compute_notification_stats,
    get_notification_stats,
)
from .update_notification import UPDATABLE_FIELDS, update_notification

__all__ = [
    "EVENT_NOTIFICATION_CREATED",
    "UPDATABLE_FIELDS",
    "EngagementStats",
    "LiveSessionBroadcaster",
    "NotificationPage",
    "NotificationStats",
    "Pagination",
    "SendResult",
    "acknowledge",
    "coerce_target_ids",
    "compute_listing_stats",
    "compute_notification_stats",
    "create_notification",
    "delete_notification",
    "dispatch_notification_created",
    "engagement_stats",
    "get_notification",
    "get_notification_stats",
    "list_for_recipient",
    "list_notifications",
    "load_directory_snapshot",
    "mark_many_read",
    "mark_read",
    "resolve_audience",
    "send_notification_now",
    "serialize_notification_event",
    "update_notification",
]
