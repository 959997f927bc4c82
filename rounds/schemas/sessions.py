"""Schemas for session comments."""
from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    session_id: UUID
    content: str = Field(..., min_length=1)


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1)


__all__ = ["CommentCreate", "CommentUpdate"]
