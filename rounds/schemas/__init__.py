"""Convenience exports for schema layer."""
from .friend_groups import BulkInviteResponse, FriendGroupCreate, FriendGroupUpdate
from .notifications import NotificationResponse
from .sessions import CommentCreate, CommentUpdate

__all__ = [
    "BulkInviteResponse",
    "FriendGroupCreate",
    "FriendGroupUpdate",
    "NotificationResponse",
    "CommentCreate",
    "CommentUpdate",
]
