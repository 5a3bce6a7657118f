"""
Tests for CategoryRepository: naming, feed membership, marking and stats.
"""

import pytest

from syndication.core.exceptions import (
    CategoryConflictError,
    CategoryNotFoundError,
    FeedNotFoundError,
)
from syndication.models import Marker
from syndication.repositories import CategoryRepository, FeedRepository
from syndication.schemas import Page


class TestNaming:
    async def test_create_and_find_by_name(self, session, user):
        repo = CategoryRepository(session)
        category = await repo.create(user, "News")

        found = await repo.category_with_name(user, "News")

        assert found.api_id == category.api_id

    async def test_name_unique_per_user(self, session, user, other_user):
        repo = CategoryRepository(session)
        await repo.create(user, "News")

        with pytest.raises(CategoryConflictError):
            await repo.create(user, "News")

        assert (await repo.create(other_user, "News")).name == "News"

    async def test_rename(self, session, user):
        repo = CategoryRepository(session)
        category = await repo.create(user, "News")

        renamed = await repo.update(user, category.api_id, "World")

        assert renamed.name == "World"

    async def test_rename_to_same_name_is_noop(self, session, user):
        repo = CategoryRepository(session)
        category = await repo.create(user, "News")

        renamed = await repo.update(user, category.api_id, "News")

        assert renamed.api_id == category.api_id

    async def test_rename_conflict(self, session, user):
        repo = CategoryRepository(session)
        await repo.create(user, "News")
        category = await repo.create(user, "Sports")

        with pytest.raises(CategoryConflictError):
            await repo.update(user, category.api_id, "News")


class TestFeeds:
    async def test_add_feed(self, session, user, make_feed):
        repo = CategoryRepository(session)
        category = await repo.create(user, "News")
        feed = await make_feed("Daily")

        moved = await repo.add_feed(user, category.api_id, feed.api_id)

        assert moved.category.api_id == category.api_id
        feeds, _ = await repo.feeds(user, category.api_id, Page())
        assert [f.api_id for f in feeds] == [feed.api_id]

    async def test_add_unknown_feed(self, session, user):
        repo = CategoryRepository(session)
        category = await repo.create(user, "News")

        with pytest.raises(FeedNotFoundError):
            await repo.add_feed(user, category.api_id, "missing")

    async def test_add_feed_to_unknown_category(self, session, user, make_feed):
        feed = await make_feed("Daily")

        with pytest.raises(CategoryNotFoundError):
            await CategoryRepository(session).add_feed(user, "missing", feed.api_id)

    async def test_feeds_pages(self, session, user, make_feed):
        repo = CategoryRepository(session)
        category = await repo.create(user, "News")
        feeds = [await make_feed(f"Feed {i}", category_id=category.api_id) for i in range(3)]

        first, next_id = await repo.feeds(user, category.api_id, Page(count=2))
        rest, last_id = await repo.feeds(user, category.api_id, Page(continuation_id=next_id, count=2))

        assert [f.api_id for f in first + rest] == [f.api_id for f in feeds]
        assert last_id == ""

    async def test_delete_leaves_feeds_uncategorized(self, session, user, make_feed):
        repo = CategoryRepository(session)
        category = await repo.create(user, "News")
        feed = await make_feed("Daily", category_id=category.api_id)

        await repo.delete(user, category.api_id)

        assert await repo.category_with_id(user, category.api_id) is None
        survivor = await FeedRepository(session).feed_with_id(user, feed.api_id)
        assert survivor is not None
        assert survivor.category_id is None
        uncategorized, _ = await FeedRepository(session).list_uncategorized(user, Page())
        assert [f.api_id for f in uncategorized] == [feed.api_id]

    async def test_delete_missing(self, session, user):
        with pytest.raises(CategoryNotFoundError):
            await CategoryRepository(session).delete(user, "missing")


class TestMarkAndStats:
    async def test_mark_and_stats_span_every_feed(self, session, user, make_feed, make_entry):
        repo = CategoryRepository(session)
        category = await repo.create(user, "News")
        a = await make_feed("A", category_id=category.api_id)
        b = await make_feed("B", category_id=category.api_id)
        outside = await make_feed("Outside")
        await make_entry(a, "A1", minute=1)
        await make_entry(a, "A2", minute=2, saved=True)
        await make_entry(b, "B1", minute=3, mark=Marker.READ)
        await make_entry(outside, "X1", minute=4)

        stats = await repo.stats(user, category.api_id)
        assert (stats.unread, stats.read, stats.saved, stats.total) == (2, 1, 1, 3)

        count = await repo.mark(user, category.api_id, Marker.READ)
        assert count == 3

        stats = await repo.stats(user, category.api_id)
        assert (stats.unread, stats.read) == (0, 3)
        outside_stats = await FeedRepository(session).stats(user, outside.api_id)
        assert outside_stats.unread == 1

    async def test_stats_of_unknown_category(self, session, user):
        with pytest.raises(CategoryNotFoundError):
            await CategoryRepository(session).stats(user, "missing")
