"""Owner-curated friend groups whose members must all be friends of the owner."""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable
from uuid import UUID

from sqlalchemy.orm import Session

from ..models import FriendGroup, FriendGroupMember
from ..repositories import FriendGroupMemberRepository, FriendGroupRepository, FriendshipRepository
from ..schemas import FriendGroupCreate, FriendGroupUpdate
from .errors import ConflictError, ForbiddenError, NotFoundError, ValidationFailedError

logger = logging.getLogger(__name__)


def _unique_ids(values: Iterable[UUID]) -> list[UUID]:
    seen: set[UUID] = set()
    ordered: list[UUID] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        ordered.append(value)
    return ordered


def filter_non_friends(db: Session, owner_id: UUID, candidate_ids: Iterable[UUID]) -> list[UUID]:
    """Return the candidates that do not hold an accepted friendship with ``owner_id``.

    Either direction of an accepted row counts. Input order is preserved.
    """

    friend_ids = {row.other_party(owner_id) for row in FriendshipRepository(db).list_friends(owner_id)}
    return [candidate for candidate in candidate_ids if candidate not in friend_ids]


def _require_owned_group(db: Session, *, caller_id: UUID, group_id: UUID) -> FriendGroup:
    group = FriendGroupRepository(db).get_by_id(group_id)
    if group is None:
        raise NotFoundError("Friend group not found")
    if group.owner_id != caller_id:
        raise ForbiddenError("Only the group owner can manage this group")
    return group


def _build_members(group_id: UUID, user_ids: Iterable[UUID], added_by_id: UUID) -> list[FriendGroupMember]:
    now = datetime.now(timezone.utc)
    return [
        FriendGroupMember(group_id=group_id, user_id=user_id, added_by_id=added_by_id, added_at=now)
        for user_id in user_ids
    ]


def create_group(db: Session, *, caller_id: UUID, payload: FriendGroupCreate) -> FriendGroup:
    member_ids = _unique_ids(payload.initial_member_ids)
    non_friends = filter_non_friends(db, caller_id, member_ids)
    if non_friends:
        raise ValidationFailedError("All group members must be your friends", non_friend_ids=non_friends)

    group = FriendGroupRepository(db).create(
        FriendGroup(
            id=uuid.uuid4(),
            owner_id=caller_id,
            name=payload.name.strip(),
            description=payload.description,
            created_by_id=caller_id,
            created_at=datetime.now(timezone.utc),
        )
    )
    FriendGroupMemberRepository(db).create_many(_build_members(group.id, member_ids, caller_id))
    db.refresh(group)
    logger.info("Friend group %s created by %s with %d members", group.id, caller_id, len(member_ids))
    return group


def get_group(db: Session, *, caller_id: UUID, group_id: UUID) -> FriendGroup:
    return _require_owned_group(db, caller_id=caller_id, group_id=group_id)


def list_groups(db: Session, *, caller_id: UUID) -> list[FriendGroup]:
    return FriendGroupRepository(db).list_by_owner(caller_id)


def update_group(db: Session, *, caller_id: UUID, group_id: UUID, payload: FriendGroupUpdate) -> FriendGroup:
    """Rename or re-describe a group; fields left unset keep their stored value."""

    _require_owned_group(db, caller_id=caller_id, group_id=group_id)
    changes = payload.model_dump(exclude_unset=True)
    if "name" in changes and changes["name"] is not None:
        changes["name"] = changes["name"].strip()
    elif "name" in changes:
        changes.pop("name")

    updated = FriendGroupRepository(db).update(
        group_id,
        **changes,
        updated_by_id=caller_id,
        updated_at=datetime.now(timezone.utc),
    )
    if updated is None:
        raise NotFoundError("Friend group not found")
    return updated


def delete_group(db: Session, *, caller_id: UUID, group_id: UUID) -> None:
    _require_owned_group(db, caller_id=caller_id, group_id=group_id)
    removed = FriendGroupMemberRepository(db).delete_by_group(group_id)
    if not FriendGroupRepository(db).delete(group_id):
        raise NotFoundError("Friend group not found")
    logger.info("Friend group %s deleted with %d members", group_id, removed)


def add_members(
    db: Session,
    *,
    caller_id: UUID,
    group_id: UUID,
    user_ids: Iterable[UUID],
) -> list[FriendGroupMember]:
    """Add the candidates that are not yet members; all must be the owner's friends."""

    _require_owned_group(db, caller_id=caller_id, group_id=group_id)
    candidates = _unique_ids(user_ids)
    if not candidates:
        raise ValidationFailedError("At least one user is required")

    non_friends = filter_non_friends(db, caller_id, candidates)
    if non_friends:
        raise ValidationFailedError("All group members must be your friends", non_friend_ids=non_friends)

    members = FriendGroupMemberRepository(db)
    existing = members.member_ids(group_id)
    fresh = [candidate for candidate in candidates if candidate not in existing]
    if not fresh:
        raise ConflictError("All users are already members of this group")

    added = members.create_many(_build_members(group_id, fresh, caller_id))
    logger.info("Added %d members to friend group %s", len(added), group_id)
    return added


def remove_member(db: Session, *, caller_id: UUID, group_id: UUID, user_id: UUID) -> None:
    _require_owned_group(db, caller_id=caller_id, group_id=group_id)
    if not FriendGroupMemberRepository(db).delete((group_id, user_id)):
        raise NotFoundError("User is not a member of this group")
    logger.info("Removed %s from friend group %s", user_id, group_id)


__all__ = [
    "filter_non_friends",
    "create_group",
    "get_group",
    "list_groups",
    "update_group",
    "delete_group",
    "add_members",
    "remove_member",
]
