"""Use case for editing the mutable attributes of a notification."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.domain.exceptions import NotFoundError, ValidationError
from app.infrastructure.repositories import NotificationRepository
from app.utils import ensure_app_timezone

from .validators import ensure_category, ensure_priority, ensure_type, require_text

UPDATABLE_FIELDS: tuple[str, ...] = (
    "title",
    "message",
    "type",
    "category",
    "priority",
    "action_url",
    "action_text",
    "expiry_date",
    "is_active",
)
_NULLABLE_FIELDS = frozenset({"action_url", "action_text", "expiry_date"})

_VALIDATORS = {
    "title": lambda value: require_text(value, "Title"),
    "message": lambda value: require_text(value, "Message"),
    "type": ensure_type,
    "category": ensure_category,
    "priority": ensure_priority,
    "expiry_date": ensure_app_timezone,
    "is_active": bool,
}


def update_notification(
    session: Session, notification_id: int, changes: Mapping[str, Any]
) -> Notification:
    """Apply the allow-listed keys of ``changes``; every other key is ignored."""

    repository = NotificationRepository(session)
    current = repository.get(notification_id)
    if current is None:
        raise NotFoundError("Notification not found")

    accepted: dict[str, Any] = {}
    for field_name in UPDATABLE_FIELDS:
        if field_name not in changes:
            continue
        value = changes[field_name]
        if value is None:
            if field_name not in _NULLABLE_FIELDS:
                raise ValidationError(f"{field_name} cannot be empty")
            accepted[field_name] = None
            continue
        validator = _VALIDATORS.get(field_name)
        accepted[field_name] = validator(value) if validator else value

    if not accepted:
        return current
    return repository.update(replace(current, **accepted))


__all__ = ["UPDATABLE_FIELDS", "update_notification"]
