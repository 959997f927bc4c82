"""Convenience exports for ORM models."""
from .drinking_session import DrinkingSession, SessionInvite, SessionInviteStatus
from .friend_group import FriendGroup, FriendGroupMember
from .friendship import Friendship, FriendshipStatus
from .notification import Notification
from .session_comment import CommentMention, SessionComment
from .user import User

__all__ = [
    "CommentMention",
    "DrinkingSession",
    "FriendGroup",
    "FriendGroupMember",
    "Friendship",
    "FriendshipStatus",
    "Notification",
    "SessionComment",
    "SessionInvite",
    "SessionInviteStatus",
    "User",
]
