"""Domain entities describing a broadcast notification and its audience state."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

NOTIFICATION_TYPES: tuple[str, ...] = ("info", "success", "warning", "danger", "primary")
NOTIFICATION_CATEGORIES: tuple[str, ...] = (
    "Academic",
    "Administrative",
    "Event",
    "Exam",
    "Result",
    "Placement",
    "Fee",
    "Holiday",
    "Emergency",
    "General",
)
NOTIFICATION_PRIORITIES: tuple[str, ...] = ("low", "medium", "high", "urgent")
SEND_METHODS: tuple[str, ...] = ("dashboard", "email", "sms", "push")

TARGET_ALL = "all"
TARGET_STUDENTS = "students"
TARGET_COURSE = "course"
TARGET_BATCH = "batch"
TARGET_INDIVIDUAL = "individual"
TARGET_TYPES: tuple[str, ...] = (
    TARGET_ALL,
    TARGET_STUDENTS,
    TARGET_COURSE,
    TARGET_BATCH,
    TARGET_INDIVIDUAL,
)

STATUS_ACTIVE = "active"
STATUS_EXPIRED = "expired"
STATUS_SCHEDULED = "scheduled"

DEFAULT_TYPE = "info"
DEFAULT_CATEGORY = "General"
DEFAULT_PRIORITY = "medium"
DEFAULT_SEND_METHOD = "dashboard"


@dataclass
class NotificationReceiver:
    """Read state of a single recipient."""

    user_id: int
    read: bool = False
    read_at: datetime | None = None


@dataclass
class NotificationAckReceiver:
    """Acknowledgement state of a single recipient."""

    user_id: int
    acknowledged: bool = False
    acknowledged_at: datetime | None = None


@dataclass
class NotificationSender:
    """Display information about the identity that created the broadcast."""

    id: int
    username: str
    email: str


@dataclass
class Notification:
    """A broadcast delivered to a resolved audience."""

    id: int | None
    title: str
    message: str
    sender_id: int
    type: str = DEFAULT_TYPE
    category: str = DEFAULT_CATEGORY
    priority: str = DEFAULT_PRIORITY
    target_type: str = TARGET_ALL
    target_ids: list[int] = field(default_factory=list)
    receivers: list[NotificationReceiver] = field(default_factory=list)
    ack_receivers: list[NotificationAckReceiver] = field(default_factory=list)
    require_ack: bool = False
    send_method: list[str] = field(default_factory=lambda: [DEFAULT_SEND_METHOD])
    action_url: str | None = None
    action_text: str | None = None
    schedule_at: datetime | None = None
    expiry_date: datetime | None = None
    sent_at: datetime | None = None
    is_active: bool = True
    sent_count: int = 0
    read_count: int = 0
    ack_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    sender: NotificationSender | None = None

    def is_scheduled(self, now: datetime) -> bool:
        """Return ``True`` while ``schedule_at`` lies in the future."""

        return self.schedule_at is not None and self.schedule_at > now

    def is_expired(self, now: datetime) -> bool:
        """Return ``True`` once ``expiry_date`` has passed."""

        return self.expiry_date is not None and self.expiry_date < now

    def status_at(self, now: datetime) -> str:
        if self.is_scheduled(now):
            return STATUS_SCHEDULED
        if self.is_expired(now):
            return STATUS_EXPIRED
        return STATUS_ACTIVE

    def receiver_for(self, user_id: int) -> NotificationReceiver | None:
        for receiver in self.receivers:
            if receiver.user_id == user_id:
                return receiver
        return None


@dataclass(frozen=True)
class NotificationSummary:
    """Columns needed by the statistics aggregator."""

    category: str
    priority: str
    is_active: bool
    sent_count: int
    read_count: int
    schedule_at: datetime | None
    expiry_date: datetime | None
    created_at: datetime


__all__ = [
    "DEFAULT_CATEGORY",
    "DEFAULT_PRIORITY",
    "DEFAULT_SEND_METHOD",
    "DEFAULT_TYPE",
    "NOTIFICATION_CATEGORIES",
    "NOTIFICATION_PRIORITIES",
    "NOTIFICATION_TYPES",
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
    "Notification",
    "NotificationAckReceiver",
    "NotificationReceiver",
    "NotificationSender",
    "NotificationSummary",
]
