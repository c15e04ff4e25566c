"""SQLAlchemy models for broadcast notifications and their audience rows."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation of a notification broadcast."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(20), nullable=False, default="info")
    category = Column(String(30), nullable=False, default="General", index=True)
    priority = Column(String(10), nullable=False, default="medium", index=True)
    sender_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    target_type = Column(String(20), nullable=False, default="all")
    target_ids = Column(JSON, nullable=False, default=list)
    require_ack = Column(Boolean, nullable=False, default=False)
    send_method = Column(JSON, nullable=False, default=lambda: ["dashboard"])
    action_url = Column(String(500), nullable=True)
    action_text = Column(String(100), nullable=True)
    schedule_at = Column(DateTime, nullable=True, index=True)
    expiry_date = Column(DateTime, nullable=True, index=True)
    sent_at = Column(DateTime, nullable=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    sent_count = Column(Integer, nullable=False, default=0)
    read_count = Column(Integer, nullable=False, default=0)
    ack_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    sender = relationship("UserModel", lazy="joined")
    receivers = relationship(
        "NotificationReceiverModel",
        cascade="all, delete-orphan",
        order_by="NotificationReceiverModel.id",
    )
    ack_receivers = relationship(
        "NotificationAckReceiverModel",
        cascade="all, delete-orphan",
        order_by="NotificationAckReceiverModel.id",
    )


class NotificationReceiverModel(Base):
    """Read state of one recipient of a notification."""

    __tablename__ = "notification_receiver"
    __table_args__ = (
        UniqueConstraint("notification_id", "user_id", name="uq_notification_receiver"),
        Index("ix_notification_receiver_user_read", "user_id", "read"),
    )

    id = Column(Integer, primary_key=True)
    notification_id = Column(
        Integer, ForeignKey("notification.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(Integer, nullable=False)
    read = Column(Boolean, nullable=False, default=False)
    read_at = Column(DateTime, nullable=True)


class NotificationAckReceiverModel(Base):
    """Acknowledgement state of one recipient of a notification."""

    __tablename__ = "notification_ack_receiver"
    __table_args__ = (
        UniqueConstraint(
            "notification_id", "user_id", name="uq_notification_ack_receiver"
        ),
    )

    id = Column(Integer, primary_key=True)
    notification_id = Column(
        Integer, ForeignKey("notification.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(Integer, nullable=False)
    acknowledged = Column(Boolean, nullable=False, default=False)
    acknowledged_at = Column(DateTime, nullable=True)


__all__ = [
    "NotificationAckReceiverModel",
    "NotificationModel",
    "NotificationReceiverModel",
]
