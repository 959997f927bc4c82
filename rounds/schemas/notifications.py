"""Schemas for notifications."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class NotificationResponse(BaseModel):
    """Stored notification as persisted and as pushed to the live channel."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    type: str
    title: str
    message: str
    metadata: str | None = Field(default=None, validation_alias=AliasChoices("metadata_json", "metadata"))
    read: bool
    created_at: datetime


__all__ = ["NotificationResponse"]
