"""Store for persisted notifications."""
from __future__ import annotations

from uuid import UUID

from sqlalchemy import update

from ..models import Notification
from .base import Repository


class NotificationRepository(Repository[Notification]):
    model = Notification

    def list_by_user(self, user_id: UUID) -> list[Notification]:
        return self.get_all_matching(Notification.user_id == user_id, order_by=[Notification.created_at.desc()])

    def list_unread_by_user(self, user_id: UUID) -> list[Notification]:
        return self.get_all_matching(
            Notification.user_id == user_id,
            Notification.read.is_(False),
            order_by=[Notification.created_at.desc()],
        )

    def count_unread(self, user_id: UUID) -> int:
        return self.count_matching(Notification.user_id == user_id, Notification.read.is_(False))

    def mark_as_read(self, notification_id: UUID) -> Notification | None:
        return self.update(notification_id, read=True)

    def mark_all_read(self, user_id: UUID) -> int:
        stmt = (
            update(Notification)
            .where(Notification.user_id == user_id, Notification.read.is_(False))
            .values(read=True)
        )
        result = self.session.execute(stmt)
        self._commit()
        return int(result.rowcount or 0)


__all__ = ["NotificationRepository"]
