"""ORM model for directed friendship edges between two users."""
from __future__ import annotations

from enum import StrEnum

from sqlalchemy import Column, Enum, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from rounds.database import Base
from .base import AuditMixin


class FriendshipStatus(StrEnum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Friendship(AuditMixin, Base):
    """One direction of a relation; an accepted friendship is stored as two rows."""

    __tablename__ = "friendships"

    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    friend_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    status = Column(
        Enum(*[item.value for item in FriendshipStatus], name="friendship_status"),
        nullable=False,
        default=FriendshipStatus.PENDING.value,
    )

    user = relationship("User", foreign_keys=[user_id])
    friend = relationship("User", foreign_keys=[friend_id])

    def involves(self, user_id) -> bool:
        return user_id in {self.user_id, self.friend_id}

    def other_party(self, user_id):
        return self.friend_id if self.user_id == user_id else self.user_id


__all__ = ["Friendship", "FriendshipStatus"]
