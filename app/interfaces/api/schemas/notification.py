"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationCreate(BaseModel):
    """Payload accepted when an administrator composes a notification.

    ``title`` and ``message`` are optional here so the use case can answer
    with its own message when either is missing.
    """

    title: str | None = None
    message: str | None = None
    type: str = "info"
    category: str = "General"
    priority: str = "medium"
    target_type: str = Field(default="all", alias="targetType")
    target_ids: list[Any] | None = Field(default=None, alias="targetIds")
    send_method: list[str] | None = Field(default=None, alias="sendMethod")
    action_url: str | None = Field(default=None, alias="actionUrl")
    action_text: str | None = Field(default=None, alias="actionText")
    schedule_at: datetime | None = Field(default=None, alias="scheduleAt")
    expiry_date: datetime | None = Field(default=None, alias="expiryDate")
    require_ack: bool = Field(default=False, alias="requireAck")

    model_config = ConfigDict(populate_by_name=True)


class NotificationUpdate(BaseModel):
    """Partial update; keys outside the editable set are dropped."""

    title: str | None = None
    message: str | None = None
    type: str | None = None
    category: str | None = None
    priority: str | None = None
    action_url: str | None = Field(default=None, alias="actionUrl")
    action_text: str | None = Field(default=None, alias="actionText")
    expiry_date: datetime | None = Field(default=None, alias="expiryDate")
    is_active: bool | None = Field(default=None, alias="isActive")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class NotificationSenderRead(BaseModel):
    id: int
    username: str | None = None
    email: str | None = None

    model_config = ConfigDict(from_attributes=True)


class NotificationReceiverRead(BaseModel):
    user_id: int
    read: bool
    read_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class NotificationAckReceiverRead(BaseModel):
    user_id: int
    acknowledged: bool
    acknowledged_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class NotificationRead(BaseModel):
    """Full representation returned to administrators."""

    id: int
    title: str
    message: str
    sender_id: int | None = None
    sender: NotificationSenderRead | None = None
    type: str
    category: str
    priority: str
    target_type: str
    target_ids: list[int] = Field(default_factory=list)
    receivers: list[NotificationReceiverRead] = Field(default_factory=list)
    ack_receivers: list[NotificationAckReceiverRead] = Field(default_factory=list)
    require_ack: bool = False
    send_method: list[str] = Field(default_factory=list)
    action_url: str | None = None
    action_text: str | None = None
    schedule_at: datetime | None = None
    expiry_date: datetime | None = None
    sent_at: datetime | None = None
    is_active: bool
    sent_count: int
    read_count: int
    ack_count: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class RecipientNotificationRead(BaseModel):
    """Notification as seen by one of its recipients."""

    id: int
    title: str
    message: str
    sender: NotificationSenderRead | None = None
    type: str
    category: str
    priority: str
    action_url: str | None = None
    action_text: str | None = None
    require_ack: bool = False
    expiry_date: datetime | None = None
    sent_at: datetime | None = None
    created_at: datetime | None = None
    read: bool = False
    read_at: datetime | None = None
    acknowledged: bool = False


class EngagementStatsRead(BaseModel):
    total_receivers: int = Field(serialization_alias="totalReceivers")
    read_count: int = Field(serialization_alias="readCount")
    ack_count: int = Field(serialization_alias="ackCount")
    read_percentage: float = Field(serialization_alias="readPercentage")

    model_config = ConfigDict(from_attributes=True)


class NotificationDetail(BaseModel):
    notification: NotificationRead
    stats: EngagementStatsRead


class PaginationRead(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

    model_config = ConfigDict(from_attributes=True)


class CategoryCountRead(BaseModel):
    category: str
    count: int

    model_config = ConfigDict(from_attributes=True)


class PriorityCountRead(BaseModel):
    priority: str
    count: int

    model_config = ConfigDict(from_attributes=True)


class DailyActivityRead(BaseModel):
    date: str
    count: int
    read_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class ListingStatsRead(BaseModel):
    total: int
    by_category: list[CategoryCountRead]
    by_priority: list[PriorityCountRead]
    recent: list[DailyActivityRead]

    model_config = ConfigDict(from_attributes=True)


class NotificationListRead(BaseModel):
    notifications: list[NotificationRead]
    pagination: PaginationRead
    stats: ListingStatsRead

    model_config = ConfigDict(from_attributes=True)


class StatsOverviewRead(BaseModel):
    total: int
    active: int
    scheduled: int
    expired: int

    model_config = ConfigDict(from_attributes=True)


class CategoryStatRead(BaseModel):
    category: str
    count: int
    read_rate: float

    model_config = ConfigDict(from_attributes=True)


class NotificationStatsRead(BaseModel):
    overview: StatsOverviewRead
    category_distribution: list[CategoryStatRead]
    priority_distribution: list[PriorityCountRead]
    recent_activity: list[DailyActivityRead]

    model_config = ConfigDict(from_attributes=True)


class SendResultRead(BaseModel):
    notification: NotificationRead
    pushed: bool
    channels: dict[str, bool] = Field(default_factory=dict)

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "EngagementStatsRead",
    "NotificationCreate",
    "NotificationDetail",
    "NotificationListRead",
    "NotificationRead",
    "NotificationSenderRead",
    "NotificationStatsRead",
    "NotificationUpdate",
    "RecipientNotificationRead",
    "SendResultRead",
]
