"""Fan a freshly persisted notification out to live sessions."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from app.domain.entities import Notification
from app.domain.exceptions import TransportUnavailableError
from app.infrastructure.notifications import ADMIN_ROOM

logger = logging.getLogger(__name__)

EVENT_NOTIFICATION_CREATED = "notification:created"


class LiveSessionBroadcaster(Protocol):
    """Capability to push events to connected sessions."""

    def emit_to_identity(self, user_id: int, event: dict[str, Any]) -> None: ...

    def emit_to_room(self, room: str, event: dict[str, Any]) -> None: ...


def _iso_or_none(value) -> str | None:
    return value.isoformat() if value else None


def serialize_notification_event(notification: Notification) -> dict[str, Any]:
    """Return the lightweight payload pushed to recipients."""

    sender = notification.sender
    return {
        "id": notification.id,
        "title": notification.title,
        "message": notification.message,
        "type": notification.type,
        "category": notification.category,
        "priority": notification.priority,
        "createdAt": _iso_or_none(notification.created_at),
        "sender": (
            {"id": sender.id, "username": sender.username, "email": sender.email}
            if sender
            else {"id": notification.sender_id}
        ),
    }


def dispatch_notification_created(
    notification: Notification, broadcaster: LiveSessionBroadcaster
) -> int:
    """Emit ``notification:created`` to every receiver and to the admin room.

    Returns the number of receivers the event was addressed to. Transport
    failures are logged and swallowed so persistence success never depends
    on realtime delivery.
    """

    payload = serialize_notification_event(notification)
    recipient_event = {
        "type": EVENT_NOTIFICATION_CREATED,
        "data": {"notification": payload},
    }
    admin_event = {
        "type": EVENT_NOTIFICATION_CREATED,
        "data": {
            "notification": payload,
            "stats": {"totalReceivers": len(notification.receivers)},
        },
    }

    addressed = 0
    try:
        for receiver in notification.receivers:
            broadcaster.emit_to_identity(receiver.user_id, recipient_event)
            addressed += 1
        broadcaster.emit_to_room(ADMIN_ROOM, admin_event)
    except TransportUnavailableError as exc:
        logger.warning(
            "Realtime delivery of notification %s skipped after %s of %s receivers: %s",
            notification.id,
            addressed,
            len(notification.receivers),
            exc,
        )
    return addressed


__all__ = [
    "EVENT_NOTIFICATION_CREATED",
    "LiveSessionBroadcaster",
    "dispatch_notification_created",
    "serialize_notification_event",
]
