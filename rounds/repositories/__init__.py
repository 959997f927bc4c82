"""Repository-style access to the relational store."""
from .base import Repository
from .friend_groups import FriendGroupMemberRepository, FriendGroupRepository
from .friendships import FriendshipRepository
from .notifications import NotificationRepository
from .sessions import (
    CommentMentionRepository,
    DrinkingSessionRepository,
    SessionCommentRepository,
    SessionInviteRepository,
)
from .users import UserRepository

__all__ = [
    "Repository",
    "CommentMentionRepository",
    "DrinkingSessionRepository",
    "FriendGroupMemberRepository",
    "FriendGroupRepository",
    "FriendshipRepository",
    "NotificationRepository",
    "SessionCommentRepository",
    "SessionInviteRepository",
    "UserRepository",
]
