"""Convenience exports for service layer."""
from .comment_service import (
    create_comment,
    delete_comment,
    get_comment,
    list_session_comments,
    update_comment,
)
from .errors import ConflictError, ForbiddenError, NotFoundError, SocialGraphError, ValidationFailedError
from .friend_group_service import (
    add_members,
    create_group,
    delete_group,
    filter_non_friends,
    get_group,
    list_groups,
    remove_member,
    update_group,
)
from .friendship_service import (
    create_friendship,
    delete_friendship,
    list_friends,
    list_friendships,
    list_pending_requests,
    list_sent_requests,
    transition_friendship,
)
from .mention_service import MentionParseResult, create_mentions, list_comment_mentions, parse_mentions
from .notification_service import (
    NotificationType,
    count_unread_notifications,
    create_and_send,
    delete_notification,
    get_live_channel,
    get_notification,
    list_notifications,
    list_unread_notifications,
    mark_all_read,
    mark_as_read,
    send_notification,
    send_notification_to_many,
    set_live_channel,
)
from .notification_stream import LiveChannel, NotificationStreamManager, notification_stream_manager
from .session_invite_service import (
    bulk_invite_to_session,
    create_invite,
    delete_invite,
    get_invite,
    list_pending_invites,
    list_session_invites,
    list_user_invites,
    respond_to_invite,
)

__all__ = [
    "SocialGraphError",
    "NotFoundError",
    "ForbiddenError",
    "ConflictError",
    "ValidationFailedError",
    "MentionParseResult",
    "parse_mentions",
    "create_mentions",
    "list_comment_mentions",
    "NotificationType",
    "set_live_channel",
    "get_live_channel",
    "send_notification",
    "send_notification_to_many",
    "create_and_send",
    "list_notifications",
    "list_unread_notifications",
    "count_unread_notifications",
    "get_notification",
    "mark_as_read",
    "mark_all_read",
    "delete_notification",
    "LiveChannel",
    "NotificationStreamManager",
    "notification_stream_manager",
    "create_friendship",
    "transition_friendship",
    "delete_friendship",
    "list_friends",
    "list_friendships",
    "list_pending_requests",
    "list_sent_requests",
    "filter_non_friends",
    "create_group",
    "get_group",
    "list_groups",
    "update_group",
    "delete_group",
    "add_members",
    "remove_member",
    "bulk_invite_to_session",
    "create_invite",
    "get_invite",
    "respond_to_invite",
    "delete_invite",
    "list_session_invites",
    "list_user_invites",
    "list_pending_invites",
    "create_comment",
    "get_comment",
    "update_comment",
    "delete_comment",
    "list_session_comments",
]
