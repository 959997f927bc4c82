"""Schemas for friend group mutations and bulk session invites."""
from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, Field


class FriendGroupCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    initial_member_ids: list[UUID] = Field(default_factory=list)


class FriendGroupUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)


class BulkInviteResponse(BaseModel):
    invites_sent: int
    group_name: str
    session_name: str


__all__ = ["FriendGroupCreate", "FriendGroupUpdate", "BulkInviteResponse"]
