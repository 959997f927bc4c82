"""Parse @-mentions out of comment text and persist the resolved ones."""
from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterator
from uuid import UUID

from sqlalchemy.orm import Session

from ..models import CommentMention, User
from ..repositories import CommentMentionRepository, UserRepository

logger = logging.getLogger(__name__)

# Purely "@" plus word characters: "me@example.com" yields "example".
_MENTION_PATTERN = re.compile(r"@(\w+)")


@dataclass(frozen=True, slots=True)
class MentionParseResult:
    username: str
    start_position: int
    length: int


def parse_mentions(text: str | None) -> Iterator[MentionParseResult]:
    """Yield every ``@word`` in ``text`` left to right.

    ``start_position`` is the offset of the ``@`` and ``length`` covers the
    ``@`` plus the username. Each call returns a fresh iterator.
    """

    for match in _MENTION_PATTERN.finditer(text or ""):
        username = match.group(1)
        yield MentionParseResult(username=username, start_position=match.start(), length=len(match.group(0)))


def create_mentions(db: Session, *, comment_id: UUID, content: str) -> list[CommentMention]:
    """Store one mention row per parsed username that resolves to a user.

    Unknown usernames are skipped without error.
    """

    users = UserRepository(db)
    resolved: dict[str, User | None] = {}
    mentions: list[CommentMention] = []
    for result in parse_mentions(content):
        key = result.username.lower()
        if key not in resolved:
            resolved[key] = users.find_by_username(result.username)
        user = resolved[key]
        if user is None:
            logger.debug("Mention @%s in comment %s does not match a user", result.username, comment_id)
            continue
        mentions.append(
            CommentMention(
                id=uuid.uuid4(),
                comment_id=comment_id,
                mentioned_user_id=user.id,
                start_position=result.start_position,
                length=result.length,
                created_at=datetime.now(timezone.utc),
            )
        )

    return CommentMentionRepository(db).create_many(mentions)


def list_comment_mentions(db: Session, comment_id: UUID) -> list[CommentMention]:
    return CommentMentionRepository(db).list_by_comment(comment_id)


__all__ = ["MentionParseResult", "parse_mentions", "create_mentions", "list_comment_mentions"]
