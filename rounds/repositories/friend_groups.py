"""Stores for friend groups and their membership rows."""
from __future__ import annotations

from uuid import UUID

from ..models import FriendGroup, FriendGroupMember
from .base import Repository


class FriendGroupRepository(Repository[FriendGroup]):
    model = FriendGroup

    def list_by_owner(self, owner_id: UUID) -> list[FriendGroup]:
        return self.get_all_matching(FriendGroup.owner_id == owner_id, order_by=[FriendGroup.created_at.asc()])


class FriendGroupMemberRepository(Repository[FriendGroupMember]):
    model = FriendGroupMember

    def list_by_group(self, group_id: UUID) -> list[FriendGroupMember]:
        return self.get_all_matching(
            FriendGroupMember.group_id == group_id,
            order_by=[FriendGroupMember.added_at.asc()],
        )

    def member_ids(self, group_id: UUID) -> set[UUID]:
        return {member.user_id for member in self.list_by_group(group_id)}

    def delete_by_group(self, group_id: UUID) -> int:
        return self.delete_matching(FriendGroupMember.group_id == group_id)


__all__ = ["FriendGroupRepository", "FriendGroupMemberRepository"]
