"""Errors raised by notification use cases."""


class NotificationError(Exception):
    """Base class for notification subsystem failures."""


class ValidationError(NotificationError, ValueError):
    """Required input is missing or malformed."""


class NotFoundError(NotificationError, LookupError):
    """The targeted record does not exist."""


class ForbiddenError(NotificationError, PermissionError):
    """The caller lacks the role required for the operation."""


class TransportUnavailableError(NotificationError, RuntimeError):
    """The live broadcast channel cannot deliver events right now."""


__all__ = [
    "ForbiddenError",
    "NotFoundError",
    "NotificationError",
    "TransportUnavailableError",
    "ValidationError",
]
