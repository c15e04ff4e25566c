"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import false, or_, true
from sqlalchemy.orm import Session, selectinload

from app.domain.entities import (
    STATUS_ACTIVE,
    STATUS_EXPIRED,
    STATUS_SCHEDULED,
    Notification,
    NotificationAckReceiver,
    NotificationReceiver,
    NotificationSender,
    NotificationSummary,
)
from app.infrastructure.models import (
    NotificationAckReceiverModel,
    NotificationModel,
    NotificationReceiverModel,
)
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


@dataclass(frozen=True)
class NotificationFilters:
    """Criteria accepted by :meth:`NotificationRepository.list`."""

    category: str | None = None
    priority: str | None = None
    status: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


class NotificationRepository:
    """Provide CRUD and engagement operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _query(self):
        return self.session.query(NotificationModel).options(
            selectinload(NotificationModel.receivers),
            selectinload(NotificationModel.ack_receivers),
        )

    def get(self, notification_id: int) -> Notification | None:
        model = self._query().filter(NotificationModel.id == notification_id).first()
        return self._to_entity(model) if model else None

    def exists(self, notification_id: int) -> bool:
        return (
            self.session.query(NotificationModel.id)
            .filter(NotificationModel.id == notification_id)
            .first()
            is not None
        )

    def list(
        self,
        filters: NotificationFilters,
        *,
        now: datetime,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[Notification], int]:
        """Return one page of notifications matching ``filters`` and the total count."""

        query = self.session.query(NotificationModel)
        if filters.category:
            query = query.filter(NotificationModel.category == filters.category)
        if filters.priority:
            query = query.filter(NotificationModel.priority == filters.priority)

        naive_now = ensure_app_naive_datetime(now)
        if filters.status == STATUS_ACTIVE:
            query = query.filter(NotificationModel.is_active == true())
        elif filters.status == STATUS_EXPIRED:
            query = query.filter(NotificationModel.expiry_date < naive_now)
        elif filters.status == STATUS_SCHEDULED:
            query = query.filter(NotificationModel.schedule_at > naive_now)

        if filters.start_date is not None:
            query = query.filter(
                NotificationModel.created_at >= ensure_app_naive_datetime(filters.start_date)
            )
        if filters.end_date is not None:
            query = query.filter(
                NotificationModel.created_at <= ensure_app_naive_datetime(filters.end_date)
            )

        total = query.count()
        models = (
            query.options(
                selectinload(NotificationModel.receivers),
                selectinload(NotificationModel.ack_receivers),
            )
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models], total

    def list_for_receiver(
        self,
        user_id: int,
        *,
        unread_only: bool = False,
        category: str | None = None,
        limit: int | None = None,
        now: datetime | None = None,
    ) -> Sequence[Notification]:
        """Return notifications whose audience contains ``user_id``.

        Notifications held for a future ``schedule_at`` stay hidden until they
        are sent.
        """

        receiver_filter = NotificationReceiverModel.user_id == user_id
        if unread_only:
            receiver_filter = receiver_filter & (NotificationReceiverModel.read == false())

        query = self._query().filter(NotificationModel.receivers.any(receiver_filter))
        query = query.filter(NotificationModel.is_active == true())
        naive_now = ensure_app_naive_datetime(now or now_in_app_timezone())
        query = query.filter(
            or_(
                NotificationModel.sent_at.isnot(None),
                NotificationModel.schedule_at.is_(None),
                NotificationModel.schedule_at <= naive_now,
            )
        )
        if category:
            query = query.filter(NotificationModel.category == category)
        query = query.order_by(
            NotificationModel.sent_at.desc(),
            NotificationModel.created_at.desc(),
            NotificationModel.id.desc(),
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_summaries(self, *, created_from: datetime | None = None) -> list[NotificationSummary]:
        """Return the columns needed for statistics without loading receivers."""

        query = self.session.query(
            NotificationModel.category,
            NotificationModel.priority,
            NotificationModel.is_active,
            NotificationModel.sent_count,
            NotificationModel.read_count,
            NotificationModel.schedule_at,
            NotificationModel.expiry_date,
            NotificationModel.created_at,
        )
        if created_from is not None:
            query = query.filter(
                NotificationModel.created_at >= ensure_app_naive_datetime(created_from)
            )
        return [
            NotificationSummary(
                category=row.category,
                priority=row.priority,
                is_active=bool(row.is_active),
                sent_count=row.sent_count or 0,
                read_count=row.read_count or 0,
                schedule_at=ensure_app_timezone(row.schedule_at),
                expiry_date=ensure_app_timezone(row.expiry_date),
                created_at=ensure_app_timezone(row.created_at),
            )
            for row in query.all()
        ]

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification, include_creation_fields=True)
        model.receivers = [
            NotificationReceiverModel(user_id=receiver.user_id, read=receiver.read)
            for receiver in notification.receivers
        ]
        model.ack_receivers = [
            NotificationAckReceiverModel(
                user_id=receiver.user_id, acknowledged=receiver.acknowledged
            )
            for receiver in notification.ack_receivers
        ]
        model.sent_count = len(model.receivers)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, notification: Notification) -> Notification:
        """Persist the mutable attributes of ``notification``.

        Audience rows and counters are left untouched.
        """

        if notification.id is None:
            raise ValueError("Notification id is required for updates")
        model = self.session.get(NotificationModel, notification.id)
        if model is None:
            msg = f"Notification with id {notification.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, notification, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        return self.get(notification.id)  # type: ignore[return-value]

    def delete(self, notification_id: int) -> bool:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def mark_read(self, notification_id: int, *, user_id: int, when: datetime) -> bool:
        """Flag the receiver row of ``user_id`` as read.

        Returns ``True`` when the row changed. Rows that are already read, or
        identities outside the audience, leave the record untouched.
        """

        stamp = ensure_app_naive_datetime(when)
        changed = (
            self.session.query(NotificationReceiverModel)
            .filter(
                NotificationReceiverModel.notification_id == notification_id,
                NotificationReceiverModel.user_id == user_id,
                NotificationReceiverModel.read == false(),
            )
            .update(
                {
                    NotificationReceiverModel.read: True,
                    NotificationReceiverModel.read_at: stamp,
                },
                synchronize_session=False,
            )
        )
        if changed:
            self.session.query(NotificationModel).filter(
                NotificationModel.id == notification_id
            ).update(
                {
                    NotificationModel.read_count: NotificationModel.read_count + changed,
                    NotificationModel.updated_at: stamp,
                },
                synchronize_session=False,
            )
        self.session.commit()
        return bool(changed)

    def acknowledge(self, notification_id: int, *, user_id: int, when: datetime) -> bool:
        """Flag the acknowledgement row of ``user_id``; see :meth:`mark_read`."""

        stamp = ensure_app_naive_datetime(when)
        changed = (
            self.session.query(NotificationAckReceiverModel)
            .filter(
                NotificationAckReceiverModel.notification_id == notification_id,
                NotificationAckReceiverModel.user_id == user_id,
                NotificationAckReceiverModel.acknowledged == false(),
            )
            .update(
                {
                    NotificationAckReceiverModel.acknowledged: True,
                    NotificationAckReceiverModel.acknowledged_at: stamp,
                },
                synchronize_session=False,
            )
        )
        if changed:
            self.session.query(NotificationModel).filter(
                NotificationModel.id == notification_id
            ).update(
                {
                    NotificationModel.ack_count: NotificationModel.ack_count + changed,
                    NotificationModel.updated_at: stamp,
                },
                synchronize_session=False,
            )
        self.session.commit()
        return bool(changed)

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel,
        notification: Notification,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields:
            model.sender_id = notification.sender_id
            model.target_type = notification.target_type
            model.target_ids = list(notification.target_ids)
            model.require_ack = notification.require_ack
            model.send_method = list(notification.send_method)
            model.schedule_at = ensure_app_naive_datetime(notification.schedule_at)
            if notification.created_at is not None:
                model.created_at = ensure_app_naive_datetime(notification.created_at)
        model.title = notification.title
        model.message = notification.message
        model.type = notification.type
        model.category = notification.category
        model.priority = notification.priority
        model.action_url = notification.action_url
        model.action_text = notification.action_text
        model.expiry_date = ensure_app_naive_datetime(notification.expiry_date)
        model.sent_at = ensure_app_naive_datetime(notification.sent_at)
        model.is_active = notification.is_active

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        sender = None
        if model.sender is not None:
            sender = NotificationSender(
                id=model.sender.id,
                username=model.sender.username,
                email=model.sender.email,
            )
        return Notification(
            id=model.id,
            title=model.title,
            message=model.message,
            sender_id=model.sender_id,
            type=model.type,
            category=model.category,
            priority=model.priority,
            target_type=model.target_type,
            target_ids=list(model.target_ids or []),
            receivers=[
                NotificationReceiver(
                    user_id=row.user_id,
                    read=bool(row.read),
                    read_at=ensure_app_timezone(row.read_at),
                )
                for row in model.receivers
            ],
            ack_receivers=[
                NotificationAckReceiver(
                    user_id=row.user_id,
                    acknowledged=bool(row.acknowledged),
                    acknowledged_at=ensure_app_timezone(row.acknowledged_at),
                )
                for row in model.ack_receivers
            ],
            require_ack=bool(model.require_ack),
            send_method=list(model.send_method or []),
            action_url=model.action_url,
            action_text=model.action_text,
            schedule_at=ensure_app_timezone(model.schedule_at),
            expiry_date=ensure_app_timezone(model.expiry_date),
            sent_at=ensure_app_timezone(model.sent_at),
            is_active=bool(model.is_active),
            sent_count=model.sent_count or 0,
            read_count=model.read_count or 0,
            ack_count=model.ack_count or 0,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            sender=sender,
        )


__all__ = ["NotificationFilters", "NotificationRepository"]
