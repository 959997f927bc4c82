"""Shared fixtures: a throwaway SQLite schema and a recording live channel."""
from __future__ import annotations

import os
from typing import Any, Callable, Iterator

import pytest
from sqlalchemy import delete
from sqlalchemy.orm import Session

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_rounds.db")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from rounds.database import Base, SessionLocal, engine  # noqa: E402
from rounds.models import (  # noqa: E402
    CommentMention,
    DrinkingSession,
    FriendGroup,
    FriendGroupMember,
    Friendship,
    Notification,
    SessionComment,
    SessionInvite,
    User,
)
from rounds.services import create_friendship, set_live_channel, transition_friendship  # noqa: E402

# Children first so rows never outlive what they reference.
_TABLES_IN_DELETE_ORDER = (
    CommentMention,
    SessionComment,
    SessionInvite,
    FriendGroupMember,
    FriendGroup,
    Friendship,
    Notification,
    DrinkingSession,
    User,
)


class RecordingChannel:
    """Live channel double that keeps every push; can be told to fail on the Nth push."""

    def __init__(self) -> None:
        self.pushes: list[tuple[str, str, dict[str, Any]]] = []
        self.fail_on: int | None = None

    def publish_to_group(self, group_key: str, event_name: str, payload: dict[str, Any]) -> None:
        if self.fail_on is not None and len(self.pushes) + 1 == self.fail_on:
            self.fail_on = None
            raise ConnectionError(f"push to {group_key} failed")
        self.pushes.append((group_key, event_name, payload))

    def payloads_for(self, group_key: str) -> list[dict[str, Any]]:
        return [payload for key, _, payload in self.pushes if key == group_key]


@pytest.fixture(scope="module", autouse=True)
def _create_schema() -> Iterator[None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _clean_database() -> Iterator[None]:
    with SessionLocal() as session:
        for model in _TABLES_IN_DELETE_ORDER:
            session.execute(delete(model))
        session.commit()
    yield


@pytest.fixture(autouse=True)
def live_channel() -> Iterator[RecordingChannel]:
    channel = RecordingChannel()
    set_live_channel(channel)
    yield channel
    set_live_channel(None)


@pytest.fixture
def db() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_factory(db: Session) -> Callable[[str], User]:
    def _factory(username: str) -> User:
        user = User(username=username, email=f"{username}@example.test")
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _factory


@pytest.fixture
def session_factory(db: Session) -> Callable[..., DrinkingSession]:
    def _factory(creator: User, name: str = "Friday Rounds") -> DrinkingSession:
        drinking_session = DrinkingSession(name=name, created_by_id=creator.id)
        db.add(drinking_session)
        db.commit()
        db.refresh(drinking_session)
        return drinking_session
    return _factory


@pytest.fixture
def befriend(db: Session, live_channel: RecordingChannel) -> Callable[[User, User], None]:
    """Make two users friends through the request/accept flow, then forget the pushes it caused."""

    def _befriend(requester: User, target: User) -> None:
        create_friendship(db, requester_id=requester.id, target_id=target.id)
        transition_friendship(
            db,
            caller_id=target.id,
            user_id=requester.id,
            friend_id=target.id,
            status="accepted",
        )
        live_channel.pushes.clear()
    return _befriend
