"""Out-of-band delivery channels invoked when a notification is sent."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.domain.entities import DEFAULT_SEND_METHOD, Notification
from app.infrastructure import email
from app.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)


def deliver_out_of_band(session: Session, notification: Notification) -> dict[str, bool]:
    """Invoke every configured channel listed in ``send_method``.

    Returns a mapping of channel name to delivery outcome. Channel failures
    are reported, never raised: the dashboard record is the source of truth.
    """

    outcomes: dict[str, bool] = {}
    for method in notification.send_method:
        if method == DEFAULT_SEND_METHOD:
            continue
        if method == "email":
            outcomes[method] = _deliver_email(session, notification)
        else:
            logger.info(
                "No %s gateway configured; notification %s not sent via %s",
                method,
                notification.id,
                method,
            )
            outcomes[method] = False
    return outcomes


def _deliver_email(session: Session, notification: Notification) -> bool:
    user_ids = [receiver.user_id for receiver in notification.receivers]
    users = UserRepository(session).get_map_by_ids(user_ids)
    recipients = sorted({user.email for user in users.values() if user.email})
    if not recipients:
        logger.info("Notification %s has no e-mail recipients", notification.id)
        return False
    return email.send_notification_email(
        title=notification.title,
        message=notification.message,
        recipients=recipients,
        action_url=notification.action_url,
        action_text=notification.action_text,
    )


__all__ = ["deliver_out_of_band"]
