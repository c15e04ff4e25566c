"""Use case for deleting notifications."""

import logging

from sqlalchemy.orm import Session

from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def delete_notification(session: Session, notification_id: int) -> None:
    """Hard-delete the notification together with its audience rows."""

    if not NotificationRepository(session).delete(notification_id):
        raise NotFoundError("Notification not found")
    logger.info("Notification %s deleted", notification_id)
