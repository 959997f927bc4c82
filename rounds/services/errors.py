"""Domain errors raised by the social graph and notification services."""
from __future__ import annotations

from typing import Any, Iterable
from uuid import UUID

from fastapi import status


class SocialGraphError(RuntimeError):
    """Base class; ``status_code`` is the HTTP status the API layer reports."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "SOCIAL_GRAPH_ERROR"

    def __init__(self, message: str, *, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = {"message": message, **(detail or {})}


class NotFoundError(SocialGraphError):
    """Raised when a referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class ForbiddenError(SocialGraphError):
    """Raised when the caller has no rights over the target entity."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"


class ConflictError(SocialGraphError):
    """Raised when the stored state already satisfies the request."""

    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


class ValidationFailedError(SocialGraphError):
    """Raised when a candidate user set fails the friendship check."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_FAILED"

    def __init__(self, message: str, *, non_friend_ids: Iterable[UUID] = ()) -> None:
        self.non_friend_ids = list(non_friend_ids)
        detail = {"non_friend_ids": [str(item) for item in self.non_friend_ids]} if self.non_friend_ids else None
        super().__init__(message, detail=detail)


__all__ = [
    "SocialGraphError",
    "NotFoundError",
    "ForbiddenError",
    "ConflictError",
    "ValidationFailedError",
]
