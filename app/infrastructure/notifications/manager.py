"""Connection management helpers for notification websockets."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, DefaultDict, Iterable, Set

from fastapi import WebSocket

from app.domain.entities import ROLE_ADMIN, ROLE_FACULTY, ROLE_STUDENT, StudentSnapshot, User

logger = logging.getLogger(__name__)

ADMIN_ROOM = "admins"
_ROLE_ROOMS = {ROLE_ADMIN: ADMIN_ROOM, ROLE_STUDENT: "students", ROLE_FACULTY: "faculty"}


def user_room(user_id: int) -> str:
    return f"user:{user_id}"


def rooms_for(user: User, student: StudentSnapshot | None = None) -> set[str]:
    """Return the broadcast rooms a session of ``user`` joins besides its own."""

    rooms: set[str] = set()
    role_room = _ROLE_ROOMS.get(user.role.lower())
    if role_room:
        rooms.add(role_room)
    if user.is_admin():
        rooms.add(f"admin:{user.id}")
    if student is not None:
        if student.course_id is not None:
            rooms.add(f"course:{student.course_id}")
        if student.batch_year is not None:
            rooms.add(f"year:{student.batch_year}")
        if student.semester is not None:
            rooms.add(f"semester:{student.semester}")
    return rooms


class NotificationConnectionManager:
    """Manage active websocket connections grouped into named rooms.

    Every connection joins ``user:<id>`` plus whatever role, course or batch
    rooms it is entitled to. A room with no members silently drops events.
    """

    def __init__(self) -> None:
        self._rooms: DefaultDict[str, Set[WebSocket]] = defaultdict(set)
        self._memberships: dict[WebSocket, set[str]] = {}

    async def connect(
        self, user_id: int, websocket: WebSocket, *, rooms: Iterable[str] = ()
    ) -> None:
        """Accept the websocket connection and register it in its rooms."""

        await websocket.accept()
        joined = {user_room(user_id), *rooms}
        for room in joined:
            self._rooms[room].add(websocket)
        self._memberships[websocket] = joined
        logger.debug("Websocket for user %s joined rooms %s", user_id, sorted(joined))

    def disconnect(self, websocket: WebSocket) -> None:
        """Remove ``websocket`` from every room it joined."""

        for room in self._memberships.pop(websocket, set()):
            members = self._rooms.get(room)
            if members is None:
                continue
            members.discard(websocket)
            if not members:
                self._rooms.pop(room, None)

    def room_size(self, room: str) -> int:
        return len(self._rooms.get(room, ()))

    async def send_to_room(self, room: str, message: dict[str, Any]) -> None:
        """Send ``message`` to every active connection in ``room``."""

        connections = list(self._rooms.get(room, set()))
        for connection in connections:
            try:
                await connection.send_json(message)
            except Exception:  # pragma: no cover - connection dropped mid-send
                logger.debug("Dropping stale websocket from room %s", room)
                self.disconnect(connection)

    async def send_to_user(self, user_id: int, message: dict[str, Any]) -> None:
        await self.send_to_room(user_room(user_id), message)


notification_manager = NotificationConnectionManager()


__all__ = [
    "ADMIN_ROOM",
    "NotificationConnectionManager",
    "notification_manager",
    "rooms_for",
    "user_room",
]
