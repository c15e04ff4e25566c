"""Repository implementations for infrastructure layer."""

from .notification_repository import NotificationFilters, NotificationRepository
from .student_repository import StudentRepository
from .user_repository import UserRepository

__all__ = [
    "NotificationFilters",
    "NotificationRepository",
    "StudentRepository",
    "UserRepository",
]
