"""Endpoints and websocket handler for notifications."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    LiveSessionBroadcaster,
    acknowledge as acknowledge_uc,
    create_notification as create_notification_uc,
    delete_notification as delete_notification_uc,
    engagement_stats,
    get_notification as get_notification_uc,
    get_notification_stats as get_notification_stats_uc,
    list_for_recipient,
    list_notifications as list_notifications_uc,
    mark_many_read,
    mark_read as mark_read_uc,
    send_notification_now,
    serialize_notification_event,
    update_notification as update_notification_uc,
)
from app.domain.entities import Notification, User
from app.domain.exceptions import NotFoundError, ValidationError
from app.infrastructure.database import SessionLocal, get_db
from app.infrastructure.notifications import notification_manager, rooms_for
from app.infrastructure.repositories import NotificationRepository, StudentRepository
from app.interfaces.api.dependencies import (
    get_broadcaster,
    get_current_active_user,
    require_admin,
    resolve_current_user,
)
from app.interfaces.api.schemas import (
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

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _envelope(data: BaseModel | list[BaseModel] | None = None, **extra: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"success": True}
    if isinstance(data, list):
        body["data"] = [item.model_dump(mode="json", by_alias=True) for item in data]
    elif data is not None:
        body["data"] = data.model_dump(mode="json", by_alias=True)
    body.update(extra)
    return body


def _to_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def _to_recipient_schema(notification: Notification, user_id: int) -> RecipientNotificationRead:
    receiver = notification.receiver_for(user_id)
    acknowledged = any(
        row.user_id == user_id and row.acknowledged for row in notification.ack_receivers
    )
    return RecipientNotificationRead(
        id=notification.id or 0,
        title=notification.title,
        message=notification.message,
        sender=(
            NotificationSenderRead.model_validate(notification.sender)
            if notification.sender
            else None
        ),
        type=notification.type,
        category=notification.category,
        priority=notification.priority,
        action_url=notification.action_url,
        action_text=notification.action_text,
        require_ack=notification.require_ack,
        expiry_date=notification.expiry_date,
        sent_at=notification.sent_at,
        created_at=notification.created_at,
        read=receiver.read if receiver else False,
        read_at=receiver.read_at if receiver else None,
        acknowledged=acknowledged,
    )


@router.post("", status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    broadcaster: LiveSessionBroadcaster = Depends(get_broadcaster),
) -> dict[str, Any]:
    """Create a notification, resolve its audience and push it live."""

    try:
        notification = create_notification_uc(
            db,
            sender_id=current_user.id,
            title=payload.title,
            message=payload.message,
            type=payload.type,
            category=payload.category,
            priority=payload.priority,
            target_type=payload.target_type,
            target_ids=payload.target_ids,
            send_method=payload.send_method,
            action_url=payload.action_url,
            action_text=payload.action_text,
            schedule_at=payload.schedule_at,
            expiry_date=payload.expiry_date,
            require_ack=payload.require_ack,
            broadcaster=broadcaster,
        )
    except ValidationError as exc:
        raise _to_http_error(exc) from exc

    return _envelope(
        NotificationRead.model_validate(notification),
        message="Notification sent successfully",
    )


@router.get("")
def list_notifications(
    category: str | None = Query(default=None),
    priority: str | None = Query(default=None),
    status_filter: str | None = Query(default=None, alias="status"),
    start_date: datetime | None = Query(default=None),
    end_date: datetime | None = Query(default=None),
    page: int = Query(default=1),
    limit: int = Query(default=20),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> dict[str, Any]:
    try:
        result = list_notifications_uc(
            db,
            category=category,
            priority=priority,
            status=status_filter,
            start_date=start_date,
            end_date=end_date,
            page=page,
            limit=limit,
        )
    except ValidationError as exc:
        raise _to_http_error(exc) from exc
    return _envelope(NotificationListRead.model_validate(result))


@router.get("/stats")
def notification_stats(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> dict[str, Any]:
    """Return dashboard statistics over every notification."""

    return _envelope(NotificationStatsRead.model_validate(get_notification_stats_uc(db)))


@router.get("/me")
def my_notifications(
    unread: bool = Query(default=False),
    category: str | None = Query(default=None),
    mark_read: bool = Query(default=False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> dict[str, Any]:
    """Return the notifications addressed to the caller."""

    notifications = list_for_recipient(
        db,
        user_id=current_user.id,
        unread_only=unread,
        category=category,
        mark_as_read=mark_read,
    )
    return _envelope(
        [_to_recipient_schema(notification, current_user.id) for notification in notifications]
    )


@router.get("/{notification_id}")
def get_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> dict[str, Any]:
    try:
        notification = get_notification_uc(db, notification_id)
    except NotFoundError as exc:
        raise _to_http_error(exc) from exc
    detail = NotificationDetail(
        notification=NotificationRead.model_validate(notification),
        stats=EngagementStatsRead.model_validate(engagement_stats(notification)),
    )
    return _envelope(detail)


@router.put("/{notification_id}")
def update_notification(
    notification_id: int,
    payload: NotificationUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> dict[str, Any]:
    """Apply an allow-listed partial update."""

    try:
        notification = update_notification_uc(db, notification_id, payload.changes())
    except (NotFoundError, ValidationError) as exc:
        raise _to_http_error(exc) from exc
    return _envelope(
        NotificationRead.model_validate(notification),
        message="Notification updated successfully",
    )


@router.delete("/{notification_id}")
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> dict[str, Any]:
    try:
        delete_notification_uc(db, notification_id)
    except NotFoundError as exc:
        raise _to_http_error(exc) from exc
    return _envelope(message="Notification deleted successfully")


@router.post("/{notification_id}/send")
def send_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
    broadcaster: LiveSessionBroadcaster = Depends(get_broadcaster),
) -> dict[str, Any]:
    """Stamp the send time and run the out-of-band delivery channels."""

    try:
        result = send_notification_now(db, notification_id, broadcaster=broadcaster)
    except NotFoundError as exc:
        raise _to_http_error(exc) from exc
    return _envelope(
        SendResultRead.model_validate(result),
        message="Notification sent successfully",
    )


@router.put("/{notification_id}/read")
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> dict[str, Any]:
    try:
        mark_read_uc(db, notification_id, user_id=current_user.id)
    except NotFoundError as exc:
        raise _to_http_error(exc) from exc
    return _envelope(message="Notification marked as read")


@router.put("/{notification_id}/acknowledge")
def acknowledge_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> dict[str, Any]:
    try:
        acknowledge_uc(db, notification_id, user_id=current_user.id)
    except NotFoundError as exc:
        raise _to_http_error(exc) from exc
    return _envelope(message="Notification acknowledged")


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
        student = StudentRepository(session).get_by_user_id(user.id) if user.is_student() else None
        pending = NotificationRepository(session).list_for_receiver(user.id, unread_only=True)
    except HTTPException:
        await websocket.close(code=1008)
        return
    finally:
        session.close()

    await notification_manager.connect(user.id, websocket, rooms=rooms_for(user, student))
    try:
        await websocket.send_json(
            {"type": "init", "data": [serialize_notification_event(n) for n in pending]}
        )
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
            elif message_type == "ack":
                ids = message.get("ids", [])
                if not isinstance(ids, list):
                    continue
                valid_ids = [
                    value for value in ids if isinstance(value, int) and not isinstance(value, bool)
                ]
                if not valid_ids:
                    continue
                ack_session = SessionLocal()
                try:
                    mark_many_read(ack_session, valid_ids, user_id=user.id)
                finally:
                    ack_session.close()
    except WebSocketDisconnect:
        logger.debug("Websocket for user %s disconnected", user.id)
    finally:
        notification_manager.disconnect(websocket)
