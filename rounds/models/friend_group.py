"""ORM models for owner-curated friend groups and their members."""
from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from rounds.database import Base
from .base import AuditMixin, utcnow


class FriendGroup(AuditMixin, Base):
    __tablename__ = "friend_groups"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)

    members = relationship(
        "FriendGroupMember",
        back_populates="group",
        order_by="FriendGroupMember.added_at",
    )


class FriendGroupMember(Base):
    __tablename__ = "friend_group_members"

    group_id = Column(UUID(as_uuid=True), ForeignKey("friend_groups.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    added_by_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    added_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    group = relationship("FriendGroup", back_populates="members")
    user = relationship("User", foreign_keys=[user_id])


__all__ = ["FriendGroup", "FriendGroupMember"]
