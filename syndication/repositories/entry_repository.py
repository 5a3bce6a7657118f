"""
Entry Repository

Database operations for feed entries: ingestion, scoped listing,
marking and saving.

Common Operations:
==================
- create()                  → Attach a new entry to one of the user's feeds
- entry_with_id()           → Entry or None
- list()                    → All of the user's entries
- list_from_feed()          → Entries of one feed
- list_from_category()      → Entries of every feed in a category
- list_from_tags()          → Entries carrying any of the given tags
- list_saved()              → Entries saved for later
- mark() / mark_all()       → Read/unread for one entry or all of them
- save()                    → Set or clear the saved flag
- stats()                   → Counts over all of the user's entries

Ordering:
=========
Entry lists are ordered by (published, id), oldest first. Page.newest
flips that to newest first. Page.marker narrows the candidates to
unread or read entries without changing the order or the cursor.
"""

from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from syndication.core.exceptions import (
    CategoryNotFoundError,
    EntryNotFoundError,
    FeedNotFoundError,
    TagNotFoundError,
)
from syndication.core.logging import logger
from syndication.models.category import Category
from syndication.models.entry import Entry
from syndication.models.enums import Marker
from syndication.models.feed import Feed
from syndication.models.tag import Tag
from syndication.models.user import User
from syndication.repositories import marking, scopes
from syndication.repositories.base import OwnedRepository
from syndication.repositories.pagination import paginate
from syndication.repositories.stats import entry_stats
from syndication.schemas.common import Page, Stats


class EntryRepository(OwnedRepository[Entry]):
    """
    Repository for Entry database operations.
    """

    not_found_error = EntryNotFoundError

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Entry, session)

    async def _page(self, user: User, page: Page, *criteria: Any) -> Tuple[List[Entry], str]:
        conditions = [scopes.owned_entries(user), *criteria]
        if page.marker is not None:
            conditions.append(Entry.mark == page.marker)

        return await paginate(
            self.session,
            select(Entry).where(*conditions),
            page,
            model=Entry,
            owner=user,
            sort_keys=(Entry.published, Entry.id),
            descending=page.newest,
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # INGESTION
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(
        self,
        user: User,
        feed_id: str,
        *,
        title: str = "",
        author: str = "",
        link: str = "",
        description: str = "",
        guid: Optional[str] = None,
        published: Optional[datetime] = None,
        mark: Marker = Marker.UNREAD,
        saved: bool = False,
    ) -> Entry:
        """
        Store a new entry under one of the user's feeds.

        Called by the ingestion path once a fetched item has been parsed.

        Raises:
            FeedNotFoundError: If the feed is not the user's
        """
        feed = await self.find_owned(Feed, user, feed_id)
        if feed is None:
            raise FeedNotFoundError(feed_id)

        fields: dict[str, Any] = {
            "user_id": user.id,
            "feed_id": feed.id,
            "title": title,
            "author": author,
            "link": link,
            "description": description,
            "guid": guid,
            "mark": mark,
            "saved": saved,
        }
        if published is not None:
            fields["published"] = published

        entry = await self._create(**fields)
        logger.debug("Entry created", user_id=user.api_id, feed_id=feed_id, entry_id=entry.api_id)
        return entry

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def entry_with_id(self, user: User, entry_id: str) -> Optional[Entry]:
        """Get one of the user's entries, or None."""
        return await self.with_id(user, entry_id)

    async def list(self, user: User, page: Page) -> Tuple[List[Entry], str]:
        """Page through all of the user's entries."""
        return await self._page(user, page)

    async def list_from_feed(self, user: User, feed_id: str, page: Page) -> Tuple[List[Entry], str]:
        """
        Page through the entries of one feed.

        Raises:
            FeedNotFoundError: If the feed is not the user's
        """
        feed = await self.find_owned(Feed, user, feed_id)
        if feed is None:
            raise FeedNotFoundError(feed_id)
        return await self._page(user, page, scopes.in_feed(feed))

    async def list_from_category(
        self,
        user: User,
        category_id: str,
        page: Page,
    ) -> Tuple[List[Entry], str]:
        """
        Page through the entries of every feed in a category.

        Raises:
            CategoryNotFoundError: If the category is not the user's
        """
        category = await self.find_owned(Category, user, category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return await self._page(user, page, scopes.in_category(category))

    async def list_from_tags(
        self,
        user: User,
        tag_ids: Sequence[str],
        page: Page,
    ) -> Tuple[List[Entry], str]:
        """
        Page through entries carrying any of the given tags.

        Each entry appears once even when it carries several of the tags.

        Raises:
            TagNotFoundError: If any tag id is not one of the user's tags
        """
        wanted = list(dict.fromkeys(tag_ids))
        result = await self.session.execute(
            select(Tag.api_id, Tag.id).where(Tag.user_id == user.id, Tag.api_id.in_(wanted))
        )
        found = {api_id: internal_id for api_id, internal_id in result.all()}

        missing = [tag_id for tag_id in wanted if tag_id not in found]
        if missing:
            raise TagNotFoundError(missing[0])

        return await self._page(user, page, scopes.tagged_with(found.values()))

    async def list_saved(self, user: User, page: Page) -> Tuple[List[Entry], str]:
        """Page through the user's saved entries."""
        return await self._page(user, page, Entry.saved.is_(True))

    # ═══════════════════════════════════════════════════════════════════════════
    # MARKING & SAVING
    # ═══════════════════════════════════════════════════════════════════════════

    async def mark(self, user: User, entry_id: str, marker: Marker) -> Entry:
        """
        Set the marker of one entry. Re-marking is a no-op.

        Returns:
            The updated entry

        Raises:
            EntryNotFoundError: If the entry is not the user's
        """
        entry = await self.require(user, entry_id)
        if entry.mark == marker:
            return entry
        entry.mark = marker
        return await self._save(entry)

    async def mark_all(self, user: User, marker: Marker) -> int:
        """
        Set the marker of every entry the user owns.

        Returns:
            Number of entries matched
        """
        count = await marking.mark_entries(self.session, marker, scopes.owned_entries(user))
        logger.info("All entries marked", user_id=user.api_id, marker=marker.value, count=count)
        return count

    async def save(self, user: User, entry_id: str, saved: bool = True) -> Entry:
        """
        Save an entry for later, or clear the flag with saved=False.

        Raises:
            EntryNotFoundError: If the entry is not the user's
        """
        entry = await self.require(user, entry_id)
        if entry.saved == saved:
            return entry
        entry.saved = saved
        return await self._save(entry)

    # ═══════════════════════════════════════════════════════════════════════════
    # STATS
    # ═══════════════════════════════════════════════════════════════════════════

    async def stats(self, user: User) -> Stats:
        """Entry counts over everything the user owns."""
        return await entry_stats(self.session, scopes.owned_entries(user))
