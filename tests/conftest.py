"""
Pytest configuration for the storage layer.

Every test gets its own in-memory SQLite database, so tests never see
each other's data.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from syndication.db import Database
from syndication.models import Entry, Feed, Marker, User
from syndication.repositories import EntryRepository, FeedRepository, UserRepository


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Entries get published times relative to this, one minute apart
BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
async def database():
    """Fresh database with every table created."""
    database = Database(TEST_DATABASE_URL, echo=False)
    await database.create_all()
    yield database
    await database.dispose()


@pytest.fixture
async def session(database):
    """One unit of work spanning the whole test."""
    async with database.session() as session:
        yield session


@pytest.fixture
async def user(session) -> User:
    return await UserRepository(session).create("alice")


@pytest.fixture
async def other_user(session) -> User:
    return await UserRepository(session).create("bob")


@pytest.fixture
def make_feed(session, user):
    """Factory: create a feed for `owner` (defaults to `user`)."""

    async def _make_feed(
        title: str = "Feed",
        *,
        owner: Optional[User] = None,
        category_id: Optional[str] = None,
    ) -> Feed:
        return await FeedRepository(session).create(
            owner or user,
            title=title,
            subscription=f"https://example.com/{title.lower().replace(' ', '-')}.xml",
            category_id=category_id,
        )

    return _make_feed


@pytest.fixture
def make_entry(session, user):
    """Factory: create an entry in `feed`, published `minute` minutes after BASE_TIME."""

    async def _make_entry(
        feed: Feed,
        title: str = "Entry",
        *,
        minute: int = 0,
        owner: Optional[User] = None,
        mark: Marker = Marker.UNREAD,
        saved: bool = False,
    ) -> Entry:
        return await EntryRepository(session).create(
            owner or user,
            feed.api_id,
            title=title,
            link=f"https://example.com/{title.lower().replace(' ', '-')}",
            published=BASE_TIME + timedelta(minutes=minute),
            mark=mark,
            saved=saved,
        )

    return _make_entry
