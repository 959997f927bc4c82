"""Store for directed friendship edges."""
from __future__ import annotations

from uuid import UUID

from sqlalchemy import and_, or_

from ..models import Friendship, FriendshipStatus
from .base import Repository


class FriendshipRepository(Repository[Friendship]):
    model = Friendship

    def get_edge(self, user_id: UUID, friend_id: UUID) -> Friendship | None:
        return self.get_by_id((user_id, friend_id))

    def find_live_between(self, first: UUID, second: UUID) -> Friendship | None:
        """Return a non-rejected edge between the pair in either direction."""

        return self.first_matching(
            or_(
                and_(Friendship.user_id == first, Friendship.friend_id == second),
                and_(Friendship.user_id == second, Friendship.friend_id == first),
            ),
            Friendship.status != FriendshipStatus.REJECTED,
        )

    def list_all(self) -> list[Friendship]:
        return self.get_all_matching(order_by=[Friendship.created_at.asc()])

    def list_friends(self, user_id: UUID) -> list[Friendship]:
        return self.get_all_matching(
            or_(Friendship.user_id == user_id, Friendship.friend_id == user_id),
            Friendship.status == FriendshipStatus.ACCEPTED,
            order_by=[Friendship.created_at.asc()],
        )

    def list_pending_for(self, user_id: UUID) -> list[Friendship]:
        return self.get_all_matching(
            Friendship.friend_id == user_id,
            Friendship.status == FriendshipStatus.PENDING,
            order_by=[Friendship.created_at.asc()],
        )

    def list_sent_by(self, user_id: UUID) -> list[Friendship]:
        return self.get_all_matching(
            Friendship.user_id == user_id,
            Friendship.status == FriendshipStatus.PENDING,
            order_by=[Friendship.created_at.asc()],
        )


__all__ = ["FriendshipRepository"]
