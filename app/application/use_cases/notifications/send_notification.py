"""Use case for the administrative "send now" action."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import NotificationRepository
from app.utils import now_in_app_timezone

from .channels import deliver_out_of_band
from .dispatcher import LiveSessionBroadcaster, dispatch_notification_created

logger = logging.getLogger(__name__)


@dataclass
class SendResult:
    notification: Notification
    pushed: bool
    channels: dict[str, bool] = field(default_factory=dict)


def send_notification_now(
    session: Session,
    notification_id: int,
    *,
    broadcaster: LiveSessionBroadcaster | None = None,
) -> SendResult:
    """Stamp ``sent_at`` and trigger the out-of-band channels.

    The audience fixed at creation is reused as is. A notification that was
    held for a future ``schedule_at`` is pushed to live sessions now.
    """

    repository = NotificationRepository(session)
    current = repository.get(notification_id)
    if current is None:
        raise NotFoundError("Notification not found")

    was_held = current.sent_at is None
    saved = repository.update(replace(current, sent_at=now_in_app_timezone()))

    pushed = False
    if was_held and broadcaster is not None:
        dispatch_notification_created(saved, broadcaster)
        pushed = True

    channels = deliver_out_of_band(session, saved)
    logger.info(
        "Notification %s sent (pushed=%s, channels=%s)", saved.id, pushed, channels
    )
    return SendResult(notification=saved, pushed=pushed, channels=channels)


__all__ = ["SendResult", "send_notification_now"]
