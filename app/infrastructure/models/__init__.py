"""ORM models used by the application infrastructure."""

from .course import CourseModel
from .notification import (
    NotificationAckReceiverModel,
    NotificationModel,
    NotificationReceiverModel,
)
from .student import StudentModel
from .user import UserModel

__all__ = [
    "CourseModel",
    "NotificationAckReceiverModel",
    "NotificationModel",
    "NotificationReceiverModel",
    "StudentModel",
    "UserModel",
]
