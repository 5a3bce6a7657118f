"""
Tests for EntryRepository: ordering, filtering, marking and saving.
"""

import pytest

from syndication.core.exceptions import (
    CategoryNotFoundError,
    EntryNotFoundError,
    FeedNotFoundError,
    TagNotFoundError,
)
from syndication.models import Marker
from syndication.repositories import CategoryRepository, EntryRepository, TagRepository
from syndication.schemas import Page


def titles(entries):
    return [e.title for e in entries]


@pytest.fixture
async def feed(make_feed):
    return await make_feed("Main")


@pytest.fixture
async def entries(feed, make_entry):
    # Created out of publication order so ordering is not just insertion order
    created = {}
    for minute in (2, 0, 4, 1, 3):
        created[minute] = await make_entry(feed, f"E{minute}", minute=minute)
    return [created[m] for m in range(5)]


class TestCreate:
    async def test_create_defaults(self, session, user, feed):
        entry = await EntryRepository(session).create(user, feed.api_id, title="Hello")

        assert entry.api_id
        assert entry.mark == Marker.UNREAD
        assert entry.saved is False
        assert entry.published is not None
        assert entry.feed.api_id == feed.api_id

    async def test_create_in_unknown_feed(self, session, user):
        with pytest.raises(FeedNotFoundError):
            await EntryRepository(session).create(user, "missing", title="Hello")


class TestOrdering:
    async def test_oldest_first_by_default(self, session, user, entries):
        result, next_id = await EntryRepository(session).list(user, Page())

        assert titles(result) == ["E0", "E1", "E2", "E3", "E4"]
        assert next_id == ""

    async def test_newest_first(self, session, user, entries):
        result, _ = await EntryRepository(session).list(user, Page(newest=True))

        assert titles(result) == ["E4", "E3", "E2", "E1", "E0"]

    async def test_newest_first_pages(self, session, user, entries):
        repo = EntryRepository(session)

        first, next_id = await repo.list(user, Page(count=2, newest=True))
        assert titles(first) == ["E4", "E3"]
        assert next_id == entries[2].api_id

        second, next_id = await repo.list(user, Page(continuation_id=next_id, count=2, newest=True))
        assert titles(second) == ["E2", "E1"]
        assert next_id == entries[0].api_id

        last, next_id = await repo.list(user, Page(continuation_id=next_id, count=2, newest=True))
        assert titles(last) == ["E0"]
        assert next_id == ""

    async def test_ties_on_published_are_broken_by_creation(self, session, user, feed, make_entry):
        for i in range(4):
            await make_entry(feed, f"Same {i}", minute=0)
        repo = EntryRepository(session)

        first, next_id = await repo.list(user, Page(count=2))
        rest, _ = await repo.list(user, Page(continuation_id=next_id, count=2))

        assert titles(first) + titles(rest) == ["Same 0", "Same 1", "Same 2", "Same 3"]


class TestMarkerFilter:
    async def test_filter_unread(self, session, user, entries):
        repo = EntryRepository(session)
        await repo.mark(user, entries[1].api_id, Marker.READ)
        await repo.mark(user, entries[3].api_id, Marker.READ)

        unread, _ = await repo.list(user, Page(marker=Marker.UNREAD))
        read, _ = await repo.list(user, Page(marker="read"))

        assert titles(unread) == ["E0", "E2", "E4"]
        assert titles(read) == ["E1", "E3"]

    async def test_cursor_that_no_longer_matches_filter(self, session, user, entries):
        repo = EntryRepository(session)
        _, next_id = await repo.list(user, Page(count=1, marker=Marker.UNREAD))
        assert next_id == entries[1].api_id

        # The cursor entry stops matching between calls
        await repo.mark(user, entries[1].api_id, Marker.READ)

        result, _ = await repo.list(user, Page(continuation_id=next_id, marker=Marker.UNREAD))
        assert titles(result) == ["E2", "E3", "E4"]


class TestScopedLists:
    async def test_list_from_feed(self, session, user, feed, entries, make_feed, make_entry):
        other = await make_feed("Other")
        await make_entry(other, "Elsewhere", minute=9)

        result, _ = await EntryRepository(session).list_from_feed(user, feed.api_id, Page())

        assert titles(result) == ["E0", "E1", "E2", "E3", "E4"]

    async def test_list_from_unknown_feed(self, session, user):
        with pytest.raises(FeedNotFoundError):
            await EntryRepository(session).list_from_feed(user, "missing", Page())

    async def test_list_from_category(self, session, user, make_feed, make_entry):
        category = await CategoryRepository(session).create(user, "Tech")
        a = await make_feed("A", category_id=category.api_id)
        b = await make_feed("B", category_id=category.api_id)
        outside = await make_feed("Outside")
        await make_entry(a, "A1", minute=1)
        await make_entry(b, "B1", minute=2)
        await make_entry(outside, "X1", minute=3)

        result, _ = await EntryRepository(session).list_from_category(user, category.api_id, Page())

        assert titles(result) == ["A1", "B1"]

    async def test_list_from_unknown_category(self, session, user):
        with pytest.raises(CategoryNotFoundError):
            await EntryRepository(session).list_from_category(user, "missing", Page())

    async def test_list_from_tags_returns_each_entry_once(self, session, user, entries):
        tags = TagRepository(session)
        red = await tags.create(user, "red")
        blue = await tags.create(user, "blue")
        await tags.apply(user, red.api_id, [entries[0].api_id, entries[2].api_id])
        await tags.apply(user, blue.api_id, [entries[2].api_id, entries[4].api_id])

        result, _ = await EntryRepository(session).list_from_tags(
            user, [red.api_id, blue.api_id], Page()
        )

        assert titles(result) == ["E0", "E2", "E4"]

    async def test_list_from_tags_with_unknown_tag(self, session, user, entries):
        red = await TagRepository(session).create(user, "red")

        with pytest.raises(TagNotFoundError):
            await EntryRepository(session).list_from_tags(user, [red.api_id, "missing"], Page())

    async def test_list_saved(self, session, user, entries):
        repo = EntryRepository(session)
        await repo.save(user, entries[3].api_id)
        await repo.save(user, entries[1].api_id)

        result, _ = await repo.list_saved(user, Page())

        assert titles(result) == ["E1", "E3"]


class TestMarkAndSave:
    async def test_mark_is_idempotent(self, session, user, entries):
        repo = EntryRepository(session)

        await repo.mark(user, entries[0].api_id, Marker.READ)
        entry = await repo.mark(user, entries[0].api_id, Marker.READ)

        assert entry.mark == Marker.READ
        stats = await repo.stats(user)
        assert stats.read == 1
        assert stats.unread == 4

    async def test_mark_missing(self, session, user):
        with pytest.raises(EntryNotFoundError):
            await EntryRepository(session).mark(user, "missing", Marker.READ)

    async def test_save_and_unsave(self, session, user, entries):
        repo = EntryRepository(session)

        saved = await repo.save(user, entries[0].api_id)
        assert saved.saved is True
        assert saved.mark == Marker.UNREAD

        cleared = await repo.save(user, entries[0].api_id, saved=False)
        assert cleared.saved is False

    async def test_mark_all(self, session, user, entries):
        repo = EntryRepository(session)

        count = await repo.mark_all(user, Marker.READ)

        assert count == 5
        stats = await repo.stats(user)
        assert stats.read == 5
        assert stats.unread == 0

    async def test_stats_counts_saved_independently(self, session, user, entries):
        repo = EntryRepository(session)
        await repo.mark(user, entries[0].api_id, Marker.READ)
        await repo.save(user, entries[0].api_id)
        await repo.save(user, entries[1].api_id)

        stats = await repo.stats(user)

        assert stats.unread == 4
        assert stats.read == 1
        assert stats.saved == 2
        assert stats.total == stats.unread + stats.read == 5
