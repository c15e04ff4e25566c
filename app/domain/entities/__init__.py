"""Domain entities exposed by the application."""

from .notification import (
    DEFAULT_CATEGORY,
    DEFAULT_PRIORITY,
    DEFAULT_SEND_METHOD,
    DEFAULT_TYPE,
    NOTIFICATION_CATEGORIES,
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_TYPES,
    SEND_METHODS,
    STATUS_ACTIVE,
    STATUS_EXPIRED,
    STATUS_SCHEDULED,
    TARGET_ALL,
    TARGET_BATCH,
    TARGET_COURSE,
    TARGET_INDIVIDUAL,
    TARGET_STUDENTS,
    TARGET_TYPES,
    Notification,
    NotificationAckReceiver,
    NotificationReceiver,
    NotificationSender,
    NotificationSummary,
)
from .student import (
    ACADEMIC_STATUSES,
    ACADEMIC_STATUS_ACTIVE,
    DirectorySnapshot,
    StudentSnapshot,
)
from .user import ROLES, ROLE_ADMIN, ROLE_FACULTY, ROLE_STUDENT, User

__all__ = [
    "ACADEMIC_STATUSES",
    "ACADEMIC_STATUS_ACTIVE",
    "DEFAULT_CATEGORY",
    "DEFAULT_PRIORITY",
    "DEFAULT_SEND_METHOD",
    "DEFAULT_TYPE",
    "NOTIFICATION_CATEGORIES",
    "NOTIFICATION_PRIORITIES",
    "NOTIFICATION_TYPES",
    "ROLES",
    "ROLE_ADMIN",
    "ROLE_FACULTY",
    "ROLE_STUDENT",
    "SEND_METHODS",
    "STATUS_ACTIVE",
    "STATUS_EXPIRED",
    "STATUS_SCHEDULED",
    "TARGET_ALL",
    "TARGET_BATCH",
    "TARGET_COURSE",
    "TARGET_INDIVIDUAL",
    "TARGET_STUDENTS",
    "TARGET_TYPES",
    "DirectorySnapshot",
    "Notification",
    "NotificationAckReceiver",
    "NotificationReceiver",
    "NotificationSender",
    "NotificationSummary",
    "StudentSnapshot",
    "User",
]
