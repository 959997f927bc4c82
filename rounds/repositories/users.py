"""User directory lookups."""
from __future__ import annotations

from uuid import UUID

from sqlalchemy import func

from ..models import User
from .base import Repository


class UserRepository(Repository[User]):
    model = User

    def find_by_id(self, user_id: UUID) -> User | None:
        return self.get_by_id(user_id)

    def find_by_username(self, username: str) -> User | None:
        """Exact match first, then the oldest case-insensitive match."""

        candidate = username.strip()
        if not candidate:
            return None
        exact = self.first_matching(User.username == candidate)
        if exact is not None:
            return exact
        folded = self.get_all_matching(
            func.lower(User.username) == candidate.lower(),
            order_by=[User.created_at.asc(), User.username.asc()],
        )
        return folded[0] if folded else None


__all__ = ["UserRepository"]
