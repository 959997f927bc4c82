"""Business logic for friend requests and friendships.

A friendship is stored as directed rows keyed by ``(user_id, friend_id)``. The
requester owns the pending row; once the recipient accepts, a mirrored
accepted row exists in the other direction as well.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.orm import Session

from ..models import Friendship, FriendshipStatus
from ..repositories import FriendshipRepository, UserRepository
from .errors import ConflictError, ForbiddenError, NotFoundError, ValidationFailedError
from .notification_service import NotificationType, create_and_send

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def list_friendships(db: Session) -> list[Friendship]:
    return FriendshipRepository(db).list_all()


def list_friends(db: Session, *, user_id: UUID) -> list[Friendship]:
    """Accepted rows touching ``user_id`` in either direction."""

    return FriendshipRepository(db).list_friends(user_id)


def list_pending_requests(db: Session, *, user_id: UUID) -> list[Friendship]:
    """Pending rows addressed to ``user_id``."""

    return FriendshipRepository(db).list_pending_for(user_id)


def list_sent_requests(db: Session, *, user_id: UUID) -> list[Friendship]:
    """Pending rows created by ``user_id``."""

    return FriendshipRepository(db).list_sent_by(user_id)


def create_friendship(db: Session, *, requester_id: UUID, target_id: UUID) -> Friendship:
    if requester_id == target_id:
        raise ValidationFailedError("Cannot befriend yourself")

    users = UserRepository(db)
    requester = users.find_by_id(requester_id)
    target = users.find_by_id(target_id)
    if requester is None or target is None:
        raise NotFoundError("User not found")

    friendships = FriendshipRepository(db)
    if friendships.find_live_between(requester_id, target_id) is not None:
        raise ConflictError("A friendship or pending request already exists between these users")

    now = _now()
    previous = friendships.get_edge(requester_id, target_id)
    if previous is not None:
        # Only a rejected row can remain here; a new request replaces it.
        friendship = friendships.update(
            (requester_id, target_id),
            status=FriendshipStatus.PENDING.value,
            created_by_id=requester_id,
            created_at=now,
            updated_by_id=None,
            updated_at=None,
        )
    else:
        friendship = friendships.create(
            Friendship(
                user_id=requester_id,
                friend_id=target_id,
                status=FriendshipStatus.PENDING.value,
                created_by_id=requester_id,
                created_at=now,
            )
        )
    if friendship is None:
        raise NotFoundError("Friendship not found")
    logger.info("Friend request %s -> %s created", requester_id, target_id)

    create_and_send(
        db,
        user_id=target_id,
        type_=NotificationType.FRIEND_REQUEST,
        title="New Friend Request",
        body=f"{requester.username} sent you a friend request",
        metadata=json.dumps({"userId": str(requester_id), "friendId": str(target_id)}),
    )
    return friendship


def transition_friendship(
    db: Session,
    *,
    caller_id: UUID,
    user_id: UUID,
    friend_id: UUID,
    status: FriendshipStatus | str,
) -> Friendship:
    """Accept or reject the ``(user_id, friend_id)`` row as its recipient."""

    friendships = FriendshipRepository(db)
    friendship = friendships.get_edge(user_id, friend_id)
    if friendship is None:
        raise NotFoundError("Friendship not found")
    if friendship.friend_id != caller_id:
        raise ForbiddenError("Only the recipient can respond to a friend request")

    new_status = FriendshipStatus(status)
    if new_status is FriendshipStatus.PENDING:
        raise ValidationFailedError("A friend request can only be accepted or rejected")

    current = FriendshipStatus(friendship.status)
    # Accepted and rejected are terminal; re-accepting an accepted edge is a no-op write.
    if current is not FriendshipStatus.PENDING and not (
        current is FriendshipStatus.ACCEPTED and new_status is FriendshipStatus.ACCEPTED
    ):
        raise ConflictError(f"Friendship is already {current.value}")

    now = _now()
    updated = friendships.update(
        (user_id, friend_id),
        status=new_status.value,
        updated_by_id=caller_id,
        updated_at=now,
    )
    if updated is None:
        raise NotFoundError("Friendship not found")

    if new_status is FriendshipStatus.ACCEPTED:
        _write_mirrored_edge(friendships, user_id=user_id, friend_id=friend_id, caller_id=caller_id, now=now)
    logger.info("Friendship %s -> %s marked %s", user_id, friend_id, new_status.value)
    return updated


def _write_mirrored_edge(
    friendships: FriendshipRepository,
    *,
    user_id: UUID,
    friend_id: UUID,
    caller_id: UUID,
    now: datetime,
) -> Friendship | None:
    # The pair key allows one row per direction, so an existing reverse row is
    # overwritten as accepted instead of duplicated.
    if friendships.get_edge(friend_id, user_id) is not None:
        return friendships.update(
            (friend_id, user_id),
            status=FriendshipStatus.ACCEPTED.value,
            updated_by_id=caller_id,
            updated_at=now,
        )
    return friendships.create(
        Friendship(
            user_id=friend_id,
            friend_id=user_id,
            status=FriendshipStatus.ACCEPTED.value,
            created_by_id=caller_id,
            created_at=now,
        )
    )


def delete_friendship(db: Session, *, caller_id: UUID, user_id: UUID, friend_id: UUID) -> None:
    """Remove the row as either participant, then the mirrored row if it exists."""

    friendships = FriendshipRepository(db)
    friendship = friendships.get_edge(user_id, friend_id)
    if friendship is None:
        raise NotFoundError("Friendship not found")
    if not friendship.involves(caller_id):
        raise ForbiddenError("Only a participant can remove a friendship")

    if not friendships.delete((user_id, friend_id)):
        raise NotFoundError("Friendship not found")
    if not friendships.delete((friend_id, user_id)):
        logger.debug("No mirrored friendship %s -> %s to remove", friend_id, user_id)
    logger.info("Friendship %s -> %s removed by %s", user_id, friend_id, caller_id)


__all__ = [
    "list_friendships",
    "list_friends",
    "list_pending_requests",
    "list_sent_requests",
    "create_friendship",
    "transition_friendship",
    "delete_friendship",
]
