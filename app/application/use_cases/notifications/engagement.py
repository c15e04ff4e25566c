"""Recipient engagement: read and acknowledge actions."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import NotificationRepository
from app.utils import now_in_app_timezone


def mark_read(session: Session, notification_id: int, *, user_id: int) -> bool:
    """Mark ``notification_id`` as read for ``user_id``.

    Returns ``True`` only when the call changed state. Repeated calls and
    identities outside the audience are no-ops.
    """

    repository = NotificationRepository(session)
    if not repository.exists(notification_id):
        raise NotFoundError("Notification not found")
    return repository.mark_read(notification_id, user_id=user_id, when=now_in_app_timezone())


def acknowledge(session: Session, notification_id: int, *, user_id: int) -> bool:
    """Acknowledge ``notification_id`` for ``user_id``; same semantics as :func:`mark_read`."""

    repository = NotificationRepository(session)
    if not repository.exists(notification_id):
        raise NotFoundError("Notification not found")
    return repository.acknowledge(notification_id, user_id=user_id, when=now_in_app_timezone())


def mark_many_read(session: Session, notification_ids: Iterable[int], *, user_id: int) -> int:
    """Mark every existing id in ``notification_ids`` as read; unknown ids are skipped."""

    repository = NotificationRepository(session)
    when = now_in_app_timezone()
    changed = 0
    for notification_id in dict.fromkeys(notification_ids):
        if repository.mark_read(notification_id, user_id=user_id, when=when):
            changed += 1
    return changed


def list_for_recipient(
    session: Session,
    *,
    user_id: int,
    unread_only: bool = False,
    category: str | None = None,
    mark_as_read: bool = False,
) -> Sequence[Notification]:
    """Return the notifications addressed to ``user_id``, newest first.

    With ``mark_as_read`` every returned notification is marked read for the
    caller; the returned snapshot reflects the state before marking.
    """

    notifications = NotificationRepository(session).list_for_receiver(
        user_id, unread_only=unread_only, category=category
    )
    if mark_as_read and notifications:
        mark_many_read(
            session,
            [notification.id for notification in notifications if notification.id is not None],
            user_id=user_id,
        )
    return notifications


__all__ = ["acknowledge", "list_for_recipient", "mark_many_read", "mark_read"]
