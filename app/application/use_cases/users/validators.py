"""Common validation helpers for user use cases."""

from app.domain.entities import ROLES
from app.domain.exceptions import ValidationError


def ensure_role(role: str) -> str:
    """Return ``role`` normalized to lower case or raise ``ValidationError``."""

    normalized = (role or "").strip().lower()
    if normalized not in ROLES:
        raise ValidationError(f"Invalid role: {role}")
    return normalized


def ensure_username(username: str) -> str:
    normalized = (username or "").strip()
    if not normalized:
        raise ValidationError("Username is required")
    return normalized
