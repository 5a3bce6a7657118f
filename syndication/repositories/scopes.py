"""
Entry Scopes

WHERE-clause builders that pick out a set of entries. The list, marking
and stats operations all combine these, so "the entries of category X"
means the same thing for each of them.

    owned_entries(user)      → every entry the user owns
    in_feed(feed)            → entries of one feed
    in_category(category)    → entries of every feed in a category
    tagged_with(tag_ids)     → entries carrying any of the tags
"""

from typing import Any, Iterable

from sqlalchemy import select

from syndication.models.category import Category
from syndication.models.entry import Entry
from syndication.models.entry_tag import EntryTag
from syndication.models.feed import Feed
from syndication.models.user import User


def owned_entries(user: User) -> Any:
    return Entry.user_id == user.id


def in_feed(feed: Feed) -> Any:
    return Entry.feed_id == feed.id


def in_category(category: Category) -> Any:
    return Entry.feed_id.in_(select(Feed.id).where(Feed.category_id == category.id))


def tagged_with(tag_ids: Iterable[int]) -> Any:
    return Entry.id.in_(select(EntryTag.entry_id).where(EntryTag.tag_id.in_(list(tag_ids))))
