"""Tests for mention notifications on comment create and edit."""
from __future__ import annotations

import json
import uuid

import pytest

from rounds.schemas import CommentCreate, CommentUpdate
from rounds.services import (
    ForbiddenError,
    NotFoundError,
    create_comment,
    delete_comment,
    get_comment,
    list_comment_mentions,
    list_session_comments,
    update_comment,
)


@pytest.fixture
def cast(user_factory, session_factory):
    author = user_factory("author")
    a = user_factory("anna")
    b = user_factory("bruno")
    c = user_factory("clara")
    return author, a, b, c, session_factory(author)


def _mentioned_keys(live_channel):
    return [key for key, _, payload in live_channel.pushes if payload["type"] == "mention"]


def test_create_notifies_each_mentioned_user_but_not_the_author(db, cast, live_channel):
    author, a, b, _, drinking_session = cast

    comment = create_comment(
        db,
        caller_id=author.id,
        payload=CommentCreate(
            session_id=drinking_session.id,
            content="@anna @bruno @author and @anna again, @nobody",
        ),
    )

    assert _mentioned_keys(live_channel) == [str(a.id), str(b.id)]
    payload = live_channel.pushes[0][2]
    assert payload["message"] == "author mentioned you in a comment"
    assert json.loads(payload["metadata"]) == {
        "commentId": str(comment.id),
        "sessionId": str(drinking_session.id),
    }
    assert len(list_comment_mentions(db, comment.id)) == 4


def test_edit_notifies_only_newly_mentioned_users(db, cast, live_channel):
    author, a, b, c, drinking_session = cast
    comment = create_comment(
        db,
        caller_id=author.id,
        payload=CommentCreate(session_id=drinking_session.id, content="@anna and @bruno"),
    )
    live_channel.pushes.clear()

    updated = update_comment(
        db,
        caller_id=author.id,
        comment_id=comment.id,
        payload=CommentUpdate(content="@bruno and @clara, cc @author"),
    )

    assert updated.content == "@bruno and @clara, cc @author"
    assert updated.updated_by_id == author.id
    assert _mentioned_keys(live_channel) == [str(c.id)]
    mentioned = {m.mentioned_user_id for m in list_comment_mentions(db, comment.id)}
    assert mentioned == {b.id, c.id, author.id}
    assert a.id not in mentioned


def test_only_the_author_may_edit_or_delete(db, cast, live_channel):
    author, a, _, _, drinking_session = cast
    comment = create_comment(
        db,
        caller_id=author.id,
        payload=CommentCreate(session_id=drinking_session.id, content="hello @anna"),
    )

    with pytest.raises(ForbiddenError):
        update_comment(db, caller_id=a.id, comment_id=comment.id, payload=CommentUpdate(content="hijack"))
    with pytest.raises(ForbiddenError):
        delete_comment(db, caller_id=a.id, comment_id=comment.id)

    delete_comment(db, caller_id=author.id, comment_id=comment.id)

    assert list_comment_mentions(db, comment.id) == []
    assert list_session_comments(db, drinking_session.id) == []
    with pytest.raises(NotFoundError):
        get_comment(db, comment.id)


def test_comment_on_unknown_session_is_not_found(db, user_factory):
    author = user_factory("author")
    with pytest.raises(NotFoundError):
        create_comment(db, caller_id=author.id, payload=CommentCreate(session_id=uuid.uuid4(), content="@x"))
