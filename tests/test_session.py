"""
Tests for the Database unit of work.
"""

import pytest
from sqlalchemy import text
import structlog

from syndication.core.exceptions import FeedNotFoundError, StorageError
from syndication.models import Marker
from syndication.repositories import EntryRepository, FeedRepository, UserRepository
from syndication.schemas import Page


class TestUnitOfWork:
    async def test_commit_is_visible_to_next_session(self, database):
        async with database.session() as session:
            user = await UserRepository(session).create("alice")
            await FeedRepository(session).create(user, title="Daily", subscription="https://example.com/")

        async with database.session() as session:
            feeds, _ = await FeedRepository(session).list(user, Page())

        assert [f.title for f in feeds] == ["Daily"]

    async def test_domain_error_rolls_back(self, database):
        with pytest.raises(FeedNotFoundError):
            async with database.session() as session:
                await UserRepository(session).create("alice")
                raise FeedNotFoundError("missing")

        async with database.session() as session:
            assert await UserRepository(session).user_with_name("alice") is None

    async def test_failed_bulk_mark_leaves_no_partial_state(self, database):
        async with database.session() as session:
            user = await UserRepository(session).create("alice")
            feed = await FeedRepository(session).create(user, title="Daily", subscription="https://example.com/")
            for i in range(3):
                await EntryRepository(session).create(user, feed.api_id, title=f"E{i}")

        with pytest.raises(RuntimeError):
            async with database.session() as session:
                assert await FeedRepository(session).mark(user, feed.api_id, Marker.READ) == 3
                raise RuntimeError("interrupted")

        async with database.session() as session:
            stats = await EntryRepository(session).stats(user)

        assert stats.unread == 3
        assert stats.read == 0

    async def test_database_errors_become_storage_errors(self, database):
        with pytest.raises(StorageError) as exc_info:
            async with database.session() as session:
                await session.execute(text("SELECT * FROM no_such_table"))

        assert exc_info.value.status_code == 500
        assert exc_info.value.__cause__ is not None

    async def test_ping(self, database):
        await database.ping()

    async def test_drop_and_recreate_schema(self, database):
        async with database.session() as session:
            await UserRepository(session).create("alice")

        await database.drop_all()
        await database.create_all()

        async with database.session() as session:
            assert await UserRepository(session).user_with_name("alice") is None


class TestLogContext:
    async def test_unit_of_work_id_is_bound_for_the_block(self, database):
        async with database.session():
            first = structlog.contextvars.get_contextvars().get("unit_of_work")
        assert first
        assert "unit_of_work" not in structlog.contextvars.get_contextvars()

        async with database.session():
            second = structlog.contextvars.get_contextvars().get("unit_of_work")
        assert second and second != first

    async def test_unit_of_work_id_is_unbound_after_failure(self, database):
        with pytest.raises(FeedNotFoundError):
            async with database.session():
                raise FeedNotFoundError("missing")

        assert "unit_of_work" not in structlog.contextvars.get_contextvars()
