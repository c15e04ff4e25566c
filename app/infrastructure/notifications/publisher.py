"""Utility helpers to push notification events to websocket subscribers."""

from __future__ import annotations

import asyncio
import copy
from typing import Any

from anyio import from_thread

from app.domain.exceptions import TransportUnavailableError

from .manager import NotificationConnectionManager, notification_manager, user_room


class NotificationPublisher:
    """Schedule delivery of realtime events through the connection manager.

    Implements the live-session broadcaster used by the delivery dispatcher.
    """

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    def emit_to_identity(self, user_id: int, event: dict[str, Any]) -> None:
        """Schedule ``event`` for every live session of ``user_id``."""

        self.emit_to_room(user_room(user_id), event)

    def emit_to_room(self, room: str, event: dict[str, Any]) -> None:
        """Schedule ``event`` for every live session in ``room``."""

        if self._manager.room_size(room) == 0:
            return
        self._schedule_send(room, copy.deepcopy(event))

    def _schedule_send(self, room: str, message: dict[str, Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(self._manager.send_to_room, room, message)
            except RuntimeError as exc:
                raise TransportUnavailableError(
                    "No event loop is available to deliver realtime events"
                ) from exc
        else:
            loop.create_task(self._manager.send_to_room(room, message))


notification_publisher = NotificationPublisher(notification_manager)


__all__ = ["NotificationPublisher", "notification_publisher"]
