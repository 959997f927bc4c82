"""Session comments and the mention notifications they trigger."""
from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable
from uuid import UUID

from sqlalchemy.orm import Session

from ..models import CommentMention, SessionComment
from ..repositories import (
    CommentMentionRepository,
    DrinkingSessionRepository,
    SessionCommentRepository,
    UserRepository,
)
from ..schemas import CommentCreate, CommentUpdate
from .errors import ForbiddenError, NotFoundError
from .mention_service import create_mentions
from .notification_service import NotificationType, create_and_send

logger = logging.getLogger(__name__)


def _ordered_recipients(mentions: Iterable[CommentMention], excluded: set[UUID]) -> list[UUID]:
    recipients: list[UUID] = []
    for mention in mentions:
        user_id = mention.mentioned_user_id
        if user_id in excluded or user_id in recipients:
            continue
        recipients.append(user_id)
    return recipients


def _notify_mentioned(db: Session, comment: SessionComment, author_id: UUID, recipients: list[UUID]) -> int:
    if not recipients:
        return 0
    author = UserRepository(db).find_by_id(author_id)
    author_name = author.username if author is not None else "Someone"
    metadata = json.dumps({"commentId": str(comment.id), "sessionId": str(comment.session_id)})
    for recipient_id in recipients:
        create_and_send(
            db,
            user_id=recipient_id,
            type_=NotificationType.MENTION,
            title="New Mention",
            body=f"{author_name} mentioned you in a comment",
            metadata=metadata,
        )
    logger.info("Comment %s notified %d mentioned users", comment.id, len(recipients))
    return len(recipients)


def get_comment(db: Session, comment_id: UUID) -> SessionComment:
    comment = SessionCommentRepository(db).get_by_id(comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    return comment


def _require_authored_comment(db: Session, *, caller_id: UUID, comment_id: UUID) -> SessionComment:
    comment = get_comment(db, comment_id)
    if comment.created_by_id != caller_id:
        raise ForbiddenError("Only the author can change this comment")
    return comment


def list_session_comments(db: Session, session_id: UUID) -> list[SessionComment]:
    return SessionCommentRepository(db).list_by_session(session_id)


def create_comment(db: Session, *, caller_id: UUID, payload: CommentCreate) -> SessionComment:
    """Store a comment, record its mentions and notify each mentioned user once.

    The author is never notified about mentioning themselves.
    """

    if DrinkingSessionRepository(db).get_by_id(payload.session_id) is None:
        raise NotFoundError("Session not found")

    comment = SessionCommentRepository(db).create(
        SessionComment(
            id=uuid.uuid4(),
            session_id=payload.session_id,
            user_id=caller_id,
            content=payload.content,
            created_by_id=caller_id,
            created_at=datetime.now(timezone.utc),
        )
    )
    mentions = create_mentions(db, comment_id=comment.id, content=comment.content)
    _notify_mentioned(db, comment, caller_id, _ordered_recipients(mentions, {caller_id}))
    return comment


def update_comment(
    db: Session,
    *,
    caller_id: UUID,
    comment_id: UUID,
    payload: CommentUpdate,
) -> SessionComment:
    """
    Replace a comment's content and its mention rows.

    Only users mentioned by the new content who were not mentioned before are
    notified; the editor is always skipped.
    """

    _require_authored_comment(db, caller_id=caller_id, comment_id=comment_id)

    mention_store = CommentMentionRepository(db)
    previously_mentioned = {mention.mentioned_user_id for mention in mention_store.list_by_comment(comment_id)}
    mention_store.delete_by_comment(comment_id)

    updated = SessionCommentRepository(db).update(
        comment_id,
        content=payload.content,
        updated_by_id=caller_id,
        updated_at=datetime.now(timezone.utc),
    )
    if updated is None:
        raise NotFoundError("Comment not found")

    mentions = create_mentions(db, comment_id=comment_id, content=updated.content)
    recipients = _ordered_recipients(mentions, previously_mentioned | {caller_id})
    _notify_mentioned(db, updated, caller_id, recipients)
    return updated


def delete_comment(db: Session, *, caller_id: UUID, comment_id: UUID) -> None:
    _require_authored_comment(db, caller_id=caller_id, comment_id=comment_id)
    CommentMentionRepository(db).delete_by_comment(comment_id)
    if not SessionCommentRepository(db).delete(comment_id):
        raise NotFoundError("Comment not found")
    logger.info("Comment %s deleted by %s", comment_id, caller_id)


__all__ = [
    "get_comment",
    "list_session_comments",
    "create_comment",
    "update_comment",
    "delete_comment",
]
