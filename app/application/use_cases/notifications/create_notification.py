"""Use case for creating and broadcasting a notification."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import (
    DEFAULT_CATEGORY,
    DEFAULT_PRIORITY,
    DEFAULT_TYPE,
    TARGET_ALL,
    TARGET_INDIVIDUAL,
    Notification,
    NotificationAckReceiver,
    NotificationReceiver,
)
from app.domain.exceptions import ValidationError
from app.infrastructure.repositories import NotificationRepository
from app.utils import ensure_app_timezone, now_in_app_timezone

from .audience import coerce_target_ids, load_directory_snapshot, order_receivers, resolve_audience
from .dispatcher import LiveSessionBroadcaster, dispatch_notification_created
from .validators import (
    ensure_category,
    ensure_priority,
    ensure_title_and_message,
    ensure_type,
    normalize_send_method,
)

logger = logging.getLogger(__name__)


def create_notification(
    session: Session,
    *,
    sender_id: int,
    title: str | None,
    message: str | None,
    type: str = DEFAULT_TYPE,
    category: str = DEFAULT_CATEGORY,
    priority: str = DEFAULT_PRIORITY,
    target_type: str = TARGET_ALL,
    target_ids: Iterable[object] | None = None,
    send_method: Iterable[str] | None = None,
    action_url: str | None = None,
    action_text: str | None = None,
    schedule_at: datetime | None = None,
    expiry_date: datetime | None = None,
    require_ack: bool = False,
    broadcaster: LiveSessionBroadcaster | None = None,
) -> Notification:
    """Resolve the audience, persist the record and push it to live sessions.

    Notifications scheduled for the future are stored without being pushed;
    they go out through :func:`send_notification_now`.
    """

    title, message = ensure_title_and_message(title, message)
    ids = coerce_target_ids(target_type, target_ids)
    if target_type == TARGET_INDIVIDUAL and not ids:
        raise ValidationError("At least one recipient is required for individual notifications")

    directory = load_directory_snapshot(session, target_type, ids)
    audience = resolve_audience(target_type, ids, directory)
    explicit = ids if target_type == TARGET_INDIVIDUAL else ()
    receiver_ids = order_receivers(audience, explicit)

    now = now_in_app_timezone()
    schedule_at = ensure_app_timezone(schedule_at)
    held = schedule_at is not None and schedule_at > now
    expiry_date = ensure_app_timezone(expiry_date)
    if expiry_date is not None and expiry_date <= (schedule_at or now):
        raise ValidationError("Expiry date must be after the delivery time")

    entity = Notification(
        id=None,
        title=title,
        message=message,
        sender_id=sender_id,
        type=ensure_type(type),
        category=ensure_category(category),
        priority=ensure_priority(priority),
        target_type=target_type,
        target_ids=ids,
        receivers=[NotificationReceiver(user_id=user_id) for user_id in receiver_ids],
        ack_receivers=(
            [NotificationAckReceiver(user_id=user_id) for user_id in receiver_ids]
            if require_ack
            else []
        ),
        require_ack=require_ack,
        send_method=normalize_send_method(send_method),
        action_url=action_url,
        action_text=action_text,
        schedule_at=schedule_at,
        expiry_date=expiry_date,
        sent_at=None if held else now,
        is_active=True,
        sent_count=len(receiver_ids),
        created_at=now,
    )
    saved = NotificationRepository(session).create(entity)
    logger.info(
        "Notification %s created by user %s for %s receivers (target=%s)",
        saved.id,
        sender_id,
        saved.sent_count,
        target_type,
    )

    if broadcaster is not None and not held:
        dispatch_notification_created(saved, broadcaster)
    return saved


__all__ = ["create_notification"]
