"""Realtime notification helpers for the infrastructure layer."""

from .manager import (
    ADMIN_ROOM,
    NotificationConnectionManager,
    notification_manager,
    rooms_for,
    user_room,
)
from .publisher import NotificationPublisher, notification_publisher

__all__ = [
    "ADMIN_ROOM",
    "NotificationConnectionManager",
    "notification_manager",
    "NotificationPublisher",
    "notification_publisher",
    "rooms_for",
    "user_room",
]
