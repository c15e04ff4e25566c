"""Validation helpers for notification use cases."""

from __future__ import annotations

from collections.abc import Iterable

from app.domain.entities import (
    DEFAULT_SEND_METHOD,
    NOTIFICATION_CATEGORIES,
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_TYPES,
    SEND_METHODS,
)
from app.domain.exceptions import ValidationError


def require_text(value: str | None, field_name: str) -> str:
    """Return ``value`` stripped, raising when it is missing or blank."""

    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def ensure_title_and_message(title: str | None, message: str | None) -> tuple[str, str]:
    if not (title and str(title).strip()) or not (message and str(message).strip()):
        raise ValidationError("Title and message are required")
    return str(title).strip(), str(message)


def _ensure_choice(value: str, allowed: tuple[str, ...], field_name: str) -> str:
    if value not in allowed:
        options = ", ".join(allowed)
        raise ValidationError(f"Invalid {field_name} '{value}'. Expected one of: {options}")
    return value


def ensure_type(value: str) -> str:
    return _ensure_choice(value, NOTIFICATION_TYPES, "type")


def ensure_category(value: str) -> str:
    return _ensure_choice(value, NOTIFICATION_CATEGORIES, "category")


def ensure_priority(value: str) -> str:
    return _ensure_choice(value, NOTIFICATION_PRIORITIES, "priority")


def normalize_send_method(methods: Iterable[str] | None) -> list[str]:
    """Validate delivery channels and make sure ``dashboard`` is present."""

    normalized: list[str] = [DEFAULT_SEND_METHOD]
    for method in methods or ():
        candidate = str(method).strip().lower()
        _ensure_choice(candidate, SEND_METHODS, "send method")
        if candidate not in normalized:
            normalized.append(candidate)
    return normalized


__all__ = [
    "ensure_category",
    "ensure_priority",
    "ensure_title_and_message",
    "ensure_type",
    "normalize_send_method",
    "require_text",
]
