"""
Repository Pattern Implementations

Repositories are the public surface of the storage layer. Each one wraps
the session of the current unit of work and scopes every query to the
owning user.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]              ← Model + session, create/save helpers
         │
         ├── UserRepository                ← Owners
         │
         └── OwnedRepository[ModelType]    ← with_id / require / list / delete
                  │
                  ├── CategoryRepository   ← Categories, feed membership
                  ├── FeedRepository       ← Feeds, cascade delete
                  ├── EntryRepository      ← Entries, scoped lists, marking
                  └── TagRepository        ← Tags, entry associations

Shared engines:
    pagination.paginate()   ← Inclusive cursor paging
    marking.mark_entries()  ← Single-statement bulk marking
    stats.entry_stats()     ← Single-query unread/read/saved/total counts
    scopes                  ← WHERE builders naming sets of entries

Usage Example:
==============
    async with database.session() as session:
        feeds = FeedRepository(session)
        tags = TagRepository(session)

        feed = await feeds.create(user, title="Example", subscription=url)
        tag = await tags.create(user, "later")
        await tags.apply(user, tag.api_id, [entry.api_id for entry in entries])
"""

from syndication.repositories.base import BaseRepository, OwnedRepository
from syndication.repositories.user_repository import UserRepository
from syndication.repositories.category_repository import CategoryRepository
from syndication.repositories.feed_repository import FeedRepository
from syndication.repositories.entry_repository import EntryRepository
from syndication.repositories.tag_repository import TagRepository

__all__ = [
    # Base classes
    "BaseRepository",
    "OwnedRepository",
    # Entity-specific repositories
    "UserRepository",
    "CategoryRepository",
    "FeedRepository",
    "EntryRepository",
    "TagRepository",
]
