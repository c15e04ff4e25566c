from .auth import Token
from .notification import (
    EngagementStatsRead,
    NotificationCreate,
    NotificationDetail,
    NotificationListRead,
    NotificationRead,
    NotificationSenderRead,
    NotificationStatsRead,
    NotificationUpdate,
    RecipientNotificationRead,
    SendResultRead,
)

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
    "Token",
]
