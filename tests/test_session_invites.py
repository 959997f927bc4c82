"""Tests for single session invites and the friend group fan-out."""
from __future__ import annotations

import json
import uuid

import pytest

from rounds.models import SessionInviteStatus
from rounds.repositories import NotificationRepository
from rounds.schemas import FriendGroupCreate
from rounds.services import (
    ForbiddenError,
    NotFoundError,
    ValidationFailedError,
    bulk_invite_to_session,
    create_group,
    create_invite,
    delete_invite,
    list_pending_invites,
    list_session_invites,
    list_user_invites,
    respond_to_invite,
)


@pytest.fixture
def crew(db, user_factory, befriend):
    owner = user_factory("host")
    members = [user_factory(name) for name in ("ana", "ben", "cy")]
    for member in members:
        befriend(owner, member)
    group = create_group(
        db,
        caller_id=owner.id,
        payload=FriendGroupCreate(name="Crew", initial_member_ids=[m.id for m in members]),
    )
    return owner, members, group


def test_bulk_invite_creates_one_invite_and_push_per_member(db, crew, session_factory, live_channel):
    owner, members, group = crew
    drinking_session = session_factory(owner, name="Pub Quiz")

    result = bulk_invite_to_session(db, group_id=group.id, session_id=drinking_session.id, caller_id=owner.id)

    assert result.invites_sent == 3
    assert result.group_name == "Crew"
    assert result.session_name == "Pub Quiz"

    invites = list_session_invites(db, drinking_session.id)
    assert len(invites) == 3
    assert {invite.user_id for invite in invites} == {m.id for m in members}
    assert all(invite.status == SessionInviteStatus.PENDING for invite in invites)
    invite_ids = {str(invite.id) for invite in invites}

    assert len(live_channel.pushes) == 3
    assert {key for key, _, _ in live_channel.pushes} == {str(m.id) for m in members}
    for _, _, payload in live_channel.pushes:
        assert payload["type"] == "session_invite"
        assert payload["title"] == "New Session Invite"
        assert payload["message"] == "host invited you to Pub Quiz"
        metadata = json.loads(payload["metadata"])
        assert metadata["sessionId"] == str(drinking_session.id)
        assert metadata["inviteId"] in invite_ids


def test_bulk_invite_keeps_earlier_members_when_a_push_fails(db, crew, session_factory, live_channel):
    owner, members, group = crew
    drinking_session = session_factory(owner)
    live_channel.fail_on = 2

    with pytest.raises(ConnectionError):
        bulk_invite_to_session(db, group_id=group.id, session_id=drinking_session.id, caller_id=owner.id)

    assert len(list_session_invites(db, drinking_session.id)) == 2
    assert len(live_channel.pushes) == 1
    stored = [
        item
        for m in members
        for item in NotificationRepository(db).list_by_user(m.id)
        if item.type == "session_invite"
    ]
    assert len(stored) == 2


def test_bulk_invite_guards(db, crew, session_factory):
    owner, members, group = crew
    drinking_session = session_factory(owner)

    with pytest.raises(NotFoundError):
        bulk_invite_to_session(db, group_id=uuid.uuid4(), session_id=drinking_session.id, caller_id=owner.id)
    with pytest.raises(ForbiddenError):
        bulk_invite_to_session(db, group_id=group.id, session_id=drinking_session.id, caller_id=members[0].id)
    with pytest.raises(NotFoundError):
        bulk_invite_to_session(db, group_id=group.id, session_id=uuid.uuid4(), caller_id=owner.id)

    assert list_session_invites(db, drinking_session.id) == []


def test_single_invite_lifecycle(db, user_factory, session_factory, live_channel):
    host = user_factory("host")
    guest = user_factory("guest")
    other = user_factory("other")
    drinking_session = session_factory(host)

    invite = create_invite(db, caller_id=host.id, session_id=drinking_session.id, user_id=guest.id)

    assert invite.status == SessionInviteStatus.PENDING
    assert live_channel.pushes == []
    assert [i.id for i in list_pending_invites(db, guest.id)] == [invite.id]

    with pytest.raises(ForbiddenError):
        respond_to_invite(db, caller_id=host.id, invite_id=invite.id, status="accepted")
    with pytest.raises(ValidationFailedError):
        respond_to_invite(db, caller_id=guest.id, invite_id=invite.id, status="pending")

    accepted = respond_to_invite(db, caller_id=guest.id, invite_id=invite.id, status="accepted")
    assert accepted.status == SessionInviteStatus.ACCEPTED
    assert list_pending_invites(db, guest.id) == []
    assert [i.id for i in list_user_invites(db, guest.id)] == [invite.id]

    with pytest.raises(ForbiddenError):
        delete_invite(db, caller_id=other.id, invite_id=invite.id)
    delete_invite(db, caller_id=host.id, invite_id=invite.id)
    assert list_user_invites(db, guest.id) == []


def test_invite_to_unknown_session_is_not_found(db, user_factory):
    host = user_factory("host")
    with pytest.raises(NotFoundError):
        create_invite(db, caller_id=host.id, session_id=uuid.uuid4(), user_id=host.id)
