"""Tests for the live-session fan-out of new notifications."""

from datetime import datetime

import pytest

from app.application.use_cases.notifications import (
    EVENT_NOTIFICATION_CREATED,
    dispatch_notification_created,
)
from app.domain.entities import Notification, NotificationReceiver, NotificationSender
from app.domain.exceptions import TransportUnavailableError
from app.infrastructure.notifications import (
    ADMIN_ROOM,
    NotificationConnectionManager,
    NotificationPublisher,
)


def _notification(*receiver_ids: int) -> Notification:
    return Notification(
        id=42,
        title="Exam schedule",
        message="Finals start Monday",
        sender_id=1,
        category="Exam",
        priority="high",
        receivers=[NotificationReceiver(user_id=user_id) for user_id in receiver_ids],
        created_at=datetime(2024, 5, 10, 9, 30),
        sender=NotificationSender(id=1, username="admin", email="admin@example.com"),
    )


def test_dispatch_emits_to_each_receiver_and_admin_room(broadcaster):
    addressed = dispatch_notification_created(_notification(10, 11), broadcaster)

    assert addressed == 2
    assert broadcaster.identities == [10, 11]
    event = broadcaster.identity_events[0][1]
    assert event["type"] == EVENT_NOTIFICATION_CREATED
    assert event["data"]["notification"]["id"] == 42
    assert event["data"]["notification"]["createdAt"] == "2024-05-10T09:30:00"
    assert event["data"]["notification"]["sender"]["username"] == "admin"

    [(room, admin_event)] = broadcaster.room_events
    assert room == ADMIN_ROOM
    assert admin_event["data"]["stats"] == {"totalReceivers": 2}


def test_dispatch_with_no_receivers_still_reaches_admins(broadcaster):
    assert dispatch_notification_created(_notification(), broadcaster) == 0
    assert broadcaster.identity_events == []
    assert len(broadcaster.room_events) == 1


class _FailingBroadcaster:
    def __init__(self) -> None:
        self.calls = 0

    def emit_to_identity(self, user_id, event):
        self.calls += 1
        if self.calls > 1:
            raise TransportUnavailableError("loop closed")

    def emit_to_room(self, room, event):
        raise AssertionError("admin room must not be reached after a transport failure")


def test_dispatch_swallows_transport_failures(caplog):
    with caplog.at_level("WARNING"):
        addressed = dispatch_notification_created(_notification(1, 2, 3), _FailingBroadcaster())

    assert addressed == 1
    assert "skipped" in caplog.text


def test_publisher_skips_rooms_without_sessions():
    publisher = NotificationPublisher(NotificationConnectionManager())

    publisher.emit_to_identity(99, {"type": "noop"})
    publisher.emit_to_room(ADMIN_ROOM, {"type": "noop"})


def test_publisher_without_event_loop_reports_transport_unavailable():
    manager = NotificationConnectionManager()
    manager._rooms["user:5"].add(object())
    publisher = NotificationPublisher(manager)

    with pytest.raises(TransportUnavailableError):
        publisher.emit_to_identity(5, {"type": "noop"})
