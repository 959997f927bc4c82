"""SQLAlchemy ORM models for drinking sessions and their invites."""
from __future__ import annotations

import uuid
from enum import StrEnum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from rounds.database import Base
from .base import AuditMixin


class SessionInviteStatus(StrEnum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class DrinkingSession(AuditMixin, Base):
    __tablename__ = "drinking_sessions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    starts_at = Column(DateTime(timezone=True), nullable=True)
    ends_at = Column(DateTime(timezone=True), nullable=True)


class SessionInvite(AuditMixin, Base):
    __tablename__ = "session_invites"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    session_id = Column(UUID(as_uuid=True), ForeignKey("drinking_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(
        Enum(*[item.value for item in SessionInviteStatus], name="session_invite_status"),
        nullable=False,
        default=SessionInviteStatus.PENDING.value,
    )

    session = relationship("DrinkingSession")
    user = relationship("User", foreign_keys=[user_id])


__all__ = ["DrinkingSession", "SessionInvite", "SessionInviteStatus"]
