"""Session invites, including the fan-out that invites a whole friend group."""
from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.orm import Session

from ..models import SessionInvite, SessionInviteStatus
from ..repositories import (
    DrinkingSessionRepository,
    FriendGroupMemberRepository,
    FriendGroupRepository,
    SessionInviteRepository,
    UserRepository,
)
from ..schemas import BulkInviteResponse
from .errors import ForbiddenError, NotFoundError, ValidationFailedError
from .notification_service import NotificationType, create_and_send

logger = logging.getLogger(__name__)


def _new_invite(*, session_id: UUID, user_id: UUID, created_by_id: UUID) -> SessionInvite:
    return SessionInvite(
        id=uuid.uuid4(),
        session_id=session_id,
        user_id=user_id,
        status=SessionInviteStatus.PENDING.value,
        created_by_id=created_by_id,
        created_at=datetime.now(timezone.utc),
    )


def bulk_invite_to_session(
    db: Session,
    *,
    group_id: UUID,
    session_id: UUID,
    caller_id: UUID,
) -> BulkInviteResponse:
    """
    Invite every member of the caller's group to a session and notify each one.

    Members are processed one at a time: each invite is committed and its
    notification pushed before the next member is handled. A failure part way
    through leaves the earlier invites and notifications in place.
    """

    group = FriendGroupRepository(db).get_by_id(group_id)
    if group is None:
        raise NotFoundError("Friend group not found")
    if group.owner_id != caller_id:
        raise ForbiddenError("Only the group owner can invite the group")

    drinking_session = DrinkingSessionRepository(db).get_by_id(session_id)
    if drinking_session is None:
        raise NotFoundError("Session not found")

    caller = UserRepository(db).find_by_id(caller_id)
    caller_name = caller.username if caller is not None else "Someone"

    invites = SessionInviteRepository(db)
    members = FriendGroupMemberRepository(db).list_by_group(group_id)
    invites_sent = 0
    for member in members:
        invite = invites.create(_new_invite(session_id=session_id, user_id=member.user_id, created_by_id=caller_id))
        create_and_send(
            db,
            user_id=member.user_id,
            type_=NotificationType.SESSION_INVITE,
            title="New Session Invite",
            body=f"{caller_name} invited you to {drinking_session.name}",
            metadata=json.dumps({"sessionId": str(session_id), "inviteId": str(invite.id)}),
        )
        invites_sent += 1

    logger.info(
        "Group %s invited to session %s: %d invites sent",
        group_id,
        session_id,
        invites_sent,
    )
    return BulkInviteResponse(
        invites_sent=invites_sent,
        group_name=group.name,
        session_name=drinking_session.name,
    )


def create_invite(db: Session, *, caller_id: UUID, session_id: UUID, user_id: UUID) -> SessionInvite:
    """Store a single pending invite. No notification is sent for it."""

    if DrinkingSessionRepository(db).get_by_id(session_id) is None:
        raise NotFoundError("Session not found")
    if UserRepository(db).find_by_id(user_id) is None:
        raise NotFoundError("User not found")
    invite = SessionInviteRepository(db).create(
        _new_invite(session_id=session_id, user_id=user_id, created_by_id=caller_id)
    )
    logger.info("Invite %s created for user %s on session %s", invite.id, user_id, session_id)
    return invite


def get_invite(db: Session, invite_id: UUID) -> SessionInvite:
    invite = SessionInviteRepository(db).get_by_id(invite_id)
    if invite is None:
        raise NotFoundError("Invite not found")
    return invite


def respond_to_invite(
    db: Session,
    *,
    caller_id: UUID,
    invite_id: UUID,
    status: SessionInviteStatus | str,
) -> SessionInvite:
    invite = get_invite(db, invite_id)
    if invite.user_id != caller_id:
        raise ForbiddenError("Only the invited user can respond to an invite")

    new_status = SessionInviteStatus(status)
    if new_status is SessionInviteStatus.PENDING:
        raise ValidationFailedError("An invite can only be accepted or declined")

    updated = SessionInviteRepository(db).update(
        invite_id,
        status=new_status.value,
        updated_by_id=caller_id,
        updated_at=datetime.now(timezone.utc),
    )
    if updated is None:
        raise NotFoundError("Invite not found")
    logger.info("Invite %s %s by %s", invite_id, new_status.value, caller_id)
    return updated


def delete_invite(db: Session, *, caller_id: UUID, invite_id: UUID) -> None:
    invite = get_invite(db, invite_id)
    if caller_id not in {invite.created_by_id, invite.user_id}:
        raise ForbiddenError("Only the inviter or the invitee can remove an invite")
    if not SessionInviteRepository(db).delete(invite_id):
        raise NotFoundError("Invite not found")


def list_session_invites(db: Session, session_id: UUID) -> list[SessionInvite]:
    return SessionInviteRepository(db).list_by_session(session_id)


def list_user_invites(db: Session, user_id: UUID) -> list[SessionInvite]:
    return SessionInviteRepository(db).list_by_user(user_id)


def list_pending_invites(db: Session, user_id: UUID) -> list[SessionInvite]:
    return SessionInviteRepository(db).list_pending_by_user(user_id)


__all__ = [
    "bulk_invite_to_session",
    "create_invite",
    "get_invite",
    "respond_to_invite",
    "delete_invite",
    "list_session_invites",
    "list_user_invites",
    "list_pending_invites",
]
