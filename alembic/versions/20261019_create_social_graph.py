"""create social graph, session and notification tables

Revision ID: 20261019_create_social_graph
Revises:
Create Date: 2026-10-19
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_create_social_graph"
down_revision = None
branch_labels = None
depends_on = None


def _uuid() -> sa.types.TypeEngine:
    return sa.dialects.postgresql.UUID(as_uuid=True)


def _user_fk(ondelete: str = "CASCADE") -> sa.ForeignKey:
    return sa.ForeignKey("users.id", ondelete=ondelete)


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_by_id", _uuid(), _user_fk(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_by_id", _uuid(), _user_fk("SET NULL"), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    friendship_status = sa.Enum("pending", "accepted", "rejected", name="friendship_status")
    session_invite_status = sa.Enum("pending", "accepted", "declined", name="session_invite_status")

    op.create_table(
        "users",
        sa.Column("id", _uuid(), primary_key=True, nullable=False),
        sa.Column("username", sa.String(length=150), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("first_name", sa.String(length=150), nullable=True),
        sa.Column("last_name", sa.String(length=150), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "friendships",
        sa.Column("user_id", _uuid(), _user_fk(), primary_key=True, nullable=False),
        sa.Column("friend_id", _uuid(), _user_fk(), primary_key=True, nullable=False),
        sa.Column("status", friendship_status, nullable=False, server_default="pending"),
        *_audit_columns(),
    )
    op.create_index("ix_friendships_friend_id", "friendships", ["friend_id"])

    op.create_table(
        "friend_groups",
        sa.Column("id", _uuid(), primary_key=True, nullable=False),
        sa.Column("owner_id", _uuid(), _user_fk(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        *_audit_columns(),
    )
    op.create_index("ix_friend_groups_owner_id", "friend_groups", ["owner_id"])

    op.create_table(
        "friend_group_members",
        sa.Column(
            "group_id",
            _uuid(),
            sa.ForeignKey("friend_groups.id", ondelete="CASCADE"),
            primary_key=True,
            nullable=False,
        ),
        sa.Column("user_id", _uuid(), _user_fk(), primary_key=True, nullable=False),
        sa.Column("added_by_id", _uuid(), _user_fk(), nullable=False),
        sa.Column("added_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_friend_group_members_user_id", "friend_group_members", ["user_id"])

    op.create_table(
        "drinking_sessions",
        sa.Column("id", _uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("starts_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ends_at", sa.DateTime(timezone=True), nullable=True),
        *_audit_columns(),
    )

    op.create_table(
        "session_invites",
        sa.Column("id", _uuid(), primary_key=True, nullable=False),
        sa.Column(
            "session_id",
            _uuid(),
            sa.ForeignKey("drinking_sessions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", _uuid(), _user_fk(), nullable=False),
        sa.Column("status", session_invite_status, nullable=False, server_default="pending"),
        *_audit_columns(),
    )
    op.create_index("ix_session_invites_session_id", "session_invites", ["session_id"])
    op.create_index("ix_session_invites_user_id", "session_invites", ["user_id"])

    op.create_table(
        "session_comments",
        sa.Column("id", _uuid(), primary_key=True, nullable=False),
        sa.Column(
            "session_id",
            _uuid(),
            sa.ForeignKey("drinking_sessions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", _uuid(), _user_fk(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        *_audit_columns(),
    )
    op.create_index("ix_session_comments_session_id", "session_comments", ["session_id"])
    op.create_index("ix_session_comments_user_id", "session_comments", ["user_id"])

    op.create_table(
        "comment_mentions",
        sa.Column("id", _uuid(), primary_key=True, nullable=False),
        sa.Column(
            "comment_id",
            _uuid(),
            sa.ForeignKey("session_comments.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("mentioned_user_id", _uuid(), _user_fk(), nullable=False),
        sa.Column("start_position", sa.Integer(), nullable=False),
        sa.Column("length", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_comment_mentions_comment_id", "comment_mentions", ["comment_id"])
    op.create_index("ix_comment_mentions_mentioned_user_id", "comment_mentions", ["mentioned_user_id"])

    op.create_table(
        "notifications",
        sa.Column("id", _uuid(), primary_key=True, nullable=False),
        sa.Column("user_id", _uuid(), _user_fk(), nullable=False),
        sa.Column("type", sa.String(length=100), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("metadata", sa.Text(), nullable=True),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_notifications_user_id", table_name="notifications")
    op.drop_table("notifications")

    op.drop_index("ix_comment_mentions_mentioned_user_id", table_name="comment_mentions")
    op.drop_index("ix_comment_mentions_comment_id", table_name="comment_mentions")
    op.drop_table("comment_mentions")

    op.drop_index("ix_session_comments_user_id", table_name="session_comments")
    op.drop_index("ix_session_comments_session_id", table_name="session_comments")
    op.drop_table("session_comments")

    op.drop_index("ix_session_invites_user_id", table_name="session_invites")
    op.drop_index("ix_session_invites_session_id", table_name="session_invites")
    op.drop_table("session_invites")

    op.drop_table("drinking_sessions")

    op.drop_index("ix_friend_group_members_user_id", table_name="friend_group_members")
    op.drop_table("friend_group_members")

    op.drop_index("ix_friend_groups_owner_id", table_name="friend_groups")
    op.drop_table("friend_groups")

    op.drop_index("ix_friendships_friend_id", table_name="friendships")
    op.drop_table("friendships")

    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")

    sa.Enum(name="session_invite_status").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="friendship_status").drop(op.get_bind(), checkfirst=True)
