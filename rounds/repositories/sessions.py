"""Stores for drinking sessions, invites, comments and comment mentions."""
from __future__ import annotations

from uuid import UUID

from ..models import CommentMention, DrinkingSession, SessionComment, SessionInvite, SessionInviteStatus
from .base import Repository


class DrinkingSessionRepository(Repository[DrinkingSession]):
    model = DrinkingSession


class SessionInviteRepository(Repository[SessionInvite]):
    model = SessionInvite

    def list_by_session(self, session_id: UUID) -> list[SessionInvite]:
        return self.get_all_matching(SessionInvite.session_id == session_id, order_by=[SessionInvite.created_at.asc()])

    def list_by_user(self, user_id: UUID) -> list[SessionInvite]:
        return self.get_all_matching(SessionInvite.user_id == user_id, order_by=[SessionInvite.created_at.desc()])

    def list_pending_by_user(self, user_id: UUID) -> list[SessionInvite]:
        return self.get_all_matching(
            SessionInvite.user_id == user_id,
            SessionInvite.status == SessionInviteStatus.PENDING,
            order_by=[SessionInvite.created_at.desc()],
        )


class SessionCommentRepository(Repository[SessionComment]):
    model = SessionComment

    def list_by_session(self, session_id: UUID) -> list[SessionComment]:
        return self.get_all_matching(SessionComment.session_id == session_id, order_by=[SessionComment.created_at.asc()])


class CommentMentionRepository(Repository[CommentMention]):
    model = CommentMention

    def list_by_comment(self, comment_id: UUID) -> list[CommentMention]:
        return self.get_all_matching(
            CommentMention.comment_id == comment_id,
            order_by=[CommentMention.start_position.asc()],
        )

    def delete_by_comment(self, comment_id: UUID) -> int:
        return self.delete_matching(CommentMention.comment_id == comment_id)


__all__ = [
    "DrinkingSessionRepository",
    "SessionInviteRepository",
    "SessionCommentRepository",
    "CommentMentionRepository",
]
