"""Notification persistence and live delivery."""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from enum import StrEnum
from typing import Iterable
from uuid import UUID

from sqlalchemy.orm import Session

from ..config import get_settings
from ..models import Notification
from ..repositories import NotificationRepository
from ..schemas import NotificationResponse
from .errors import ForbiddenError, NotFoundError
from .notification_stream import LiveChannel, notification_stream_manager

logger = logging.getLogger(__name__)


class NotificationType(StrEnum):
    GENERIC = "generic"
    FRIEND_REQUEST = "friend_request"
    SESSION_INVITE = "session_invite"
    MENTION = "mention"


_live_channel: LiveChannel | None = None


def set_live_channel(channel: LiveChannel | None) -> None:
    """Override the live transport (useful for tests)."""

    global _live_channel
    _live_channel = channel


def get_live_channel() -> LiveChannel:
    return _live_channel or notification_stream_manager


def send_notification(recipient_id: UUID, notification: NotificationResponse) -> None:
    """Push ``notification`` to the recipient's live channel without persisting anything."""

    payload = notification.model_dump(mode="json")
    get_live_channel().publish_to_group(str(recipient_id), get_settings().notification_event_name, payload)


def send_notification_to_many(recipient_ids: Iterable[UUID], notification: NotificationResponse) -> int:
    """Push ``notification`` to each recipient in order; returns the number of pushes issued."""

    pushed = 0
    for recipient_id in recipient_ids:
        send_notification(recipient_id, notification)
        pushed += 1
    return pushed


def create_and_send(
    db: Session,
    *,
    user_id: UUID,
    type_: NotificationType | str,
    title: str,
    body: str,
    metadata: str | None = None,
) -> NotificationResponse:
    """Persist a new notification, then push the stored record to its recipient.

    The push only happens once the write has committed. A failed push is not
    retried and leaves the stored notification in place.
    """

    notification = Notification(
        id=uuid.uuid4(),
        user_id=user_id,
        type=str(type_),
        title=title,
        message=body,
        metadata_json=metadata,
        read=False,
        created_at=datetime.now(timezone.utc),
    )
    stored = NotificationRepository(db).create(notification)
    response = NotificationResponse.model_validate(stored)
    logger.info("Notification %s (%s) stored for user %s", response.id, response.type, user_id)

    send_notification(user_id, response)
    return response


def list_notifications(db: Session, user_id: UUID) -> list[Notification]:
    """Return notifications for the supplied recipient ordered newest first."""

    return NotificationRepository(db).list_by_user(user_id)


def list_unread_notifications(db: Session, user_id: UUID) -> list[Notification]:
    return NotificationRepository(db).list_unread_by_user(user_id)


def count_unread_notifications(db: Session, user_id: UUID) -> int:
    """Return the unread notification total for the supplied user."""

    return NotificationRepository(db).count_unread(user_id)


def get_notification(db: Session, *, caller_id: UUID, notification_id: UUID) -> Notification:
    notification = NotificationRepository(db).get_by_id(notification_id)
    if notification is None:
        raise NotFoundError("Notification not found")
    if notification.user_id != caller_id:
        raise ForbiddenError("Notification belongs to another user")
    return notification


def mark_as_read(db: Session, *, caller_id: UUID, notification_id: UUID) -> Notification:
    notification = get_notification(db, caller_id=caller_id, notification_id=notification_id)
    if notification.read:
        return notification
    updated = NotificationRepository(db).mark_as_read(notification_id)
    if updated is None:
        raise NotFoundError("Notification not found")
    return updated


def mark_all_read(db: Session, *, caller_id: UUID) -> int:
    """Mark all notifications for the caller as read; returns how many changed."""

    changed = NotificationRepository(db).mark_all_read(caller_id)
    logger.info("Marked %d notifications read for user %s", changed, caller_id)
    return changed


def delete_notification(db: Session, *, caller_id: UUID, notification_id: UUID) -> None:
    get_notification(db, caller_id=caller_id, notification_id=notification_id)
    if not NotificationRepository(db).delete(notification_id):
        raise NotFoundError("Notification not found")


__all__ = [
    "NotificationType",
    "set_live_channel",
    "get_live_channel",
    "send_notification",
    "send_notification_to_many",
    "create_and_send",
    "list_notifications",
    "list_unread_notifications",
    "count_unread_notifications",
    "get_notification",
    "mark_as_read",
    "mark_all_read",
    "delete_notification",
]
