"""Tests for friend group validation and membership management."""
from __future__ import annotations

import uuid

import pytest

from rounds.repositories import FriendGroupMemberRepository
from rounds.schemas import FriendGroupCreate, FriendGroupUpdate
from rounds.services import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationFailedError,
    add_members,
    create_friendship,
    create_group,
    delete_group,
    filter_non_friends,
    get_group,
    list_groups,
    remove_member,
    update_group,
)


def test_filter_returns_only_strangers(db, user_factory, befriend):
    owner = user_factory("owner")
    friend = user_factory("friend")
    stranger = user_factory("stranger")
    befriend(friend, owner)

    assert filter_non_friends(db, owner.id, [friend.id, stranger.id]) == [stranger.id]
    assert filter_non_friends(db, owner.id, [friend.id]) == []


def test_pending_request_does_not_count_as_friendship(db, user_factory):
    owner = user_factory("owner")
    pending = user_factory("pending")
    create_friendship(db, requester_id=owner.id, target_id=pending.id)

    assert filter_non_friends(db, owner.id, [pending.id]) == [pending.id]


def test_create_group_with_a_non_friend_fails(db, user_factory, befriend):
    owner = user_factory("owner")
    friend = user_factory("friend")
    stranger = user_factory("stranger")
    befriend(owner, friend)

    with pytest.raises(ValidationFailedError) as excinfo:
        create_group(
            db,
            caller_id=owner.id,
            payload=FriendGroupCreate(name="Crew", initial_member_ids=[friend.id, stranger.id]),
        )

    assert excinfo.value.non_friend_ids == [stranger.id]
    assert excinfo.value.detail["non_friend_ids"] == [str(stranger.id)]
    assert list_groups(db, caller_id=owner.id) == []


def test_create_group_stamps_members_with_creator(db, user_factory, befriend):
    owner = user_factory("owner")
    first = user_factory("first")
    second = user_factory("second")
    befriend(owner, first)
    befriend(second, owner)

    group = create_group(
        db,
        caller_id=owner.id,
        payload=FriendGroupCreate(
            name="  Crew ",
            description="Usual suspects",
            initial_member_ids=[first.id, second.id, first.id],
        ),
    )

    assert group.name == "Crew"
    members = FriendGroupMemberRepository(db).list_by_group(group.id)
    assert {m.user_id for m in members} == {first.id, second.id}
    assert all(m.added_by_id == owner.id for m in members)


def test_add_members_rules(db, user_factory, befriend):
    owner = user_factory("owner")
    member = user_factory("member")
    newcomer = user_factory("newcomer")
    stranger = user_factory("stranger")
    befriend(owner, member)
    befriend(owner, newcomer)
    group = create_group(db, caller_id=owner.id, payload=FriendGroupCreate(name="Crew", initial_member_ids=[member.id]))

    with pytest.raises(ForbiddenError):
        add_members(db, caller_id=member.id, group_id=group.id, user_ids=[newcomer.id])
    with pytest.raises(ValidationFailedError):
        add_members(db, caller_id=owner.id, group_id=group.id, user_ids=[newcomer.id, stranger.id])
    with pytest.raises(ConflictError):
        add_members(db, caller_id=owner.id, group_id=group.id, user_ids=[member.id])

    added = add_members(db, caller_id=owner.id, group_id=group.id, user_ids=[member.id, newcomer.id])

    assert [m.user_id for m in added] == [newcomer.id]
    assert FriendGroupMemberRepository(db).member_ids(group.id) == {member.id, newcomer.id}


def test_remove_member_requires_membership(db, user_factory, befriend):
    owner = user_factory("owner")
    member = user_factory("member")
    outsider = user_factory("outsider")
    befriend(owner, member)
    group = create_group(db, caller_id=owner.id, payload=FriendGroupCreate(name="Crew", initial_member_ids=[member.id]))

    with pytest.raises(NotFoundError):
        remove_member(db, caller_id=owner.id, group_id=group.id, user_id=outsider.id)
    with pytest.raises(ForbiddenError):
        remove_member(db, caller_id=member.id, group_id=group.id, user_id=member.id)

    remove_member(db, caller_id=owner.id, group_id=group.id, user_id=member.id)
    assert FriendGroupMemberRepository(db).member_ids(group.id) == set()


def test_update_and_delete_are_owner_only(db, user_factory, befriend):
    owner = user_factory("owner")
    member = user_factory("member")
    befriend(owner, member)
    group = create_group(
        db,
        caller_id=owner.id,
        payload=FriendGroupCreate(name="Crew", description="old", initial_member_ids=[member.id]),
    )

    with pytest.raises(ForbiddenError):
        update_group(db, caller_id=member.id, group_id=group.id, payload=FriendGroupUpdate(name="Mine"))

    renamed = update_group(db, caller_id=owner.id, group_id=group.id, payload=FriendGroupUpdate(name="Squad"))
    assert renamed.name == "Squad"
    assert renamed.description == "old"
    assert renamed.updated_by_id == owner.id

    with pytest.raises(ForbiddenError):
        delete_group(db, caller_id=member.id, group_id=group.id)

    delete_group(db, caller_id=owner.id, group_id=group.id)
    assert FriendGroupMemberRepository(db).list_by_group(group.id) == []
    with pytest.raises(NotFoundError):
        get_group(db, caller_id=owner.id, group_id=group.id)
    with pytest.raises(NotFoundError):
        get_group(db, caller_id=owner.id, group_id=uuid.uuid4())
