"""
Feed Repository

Database operations for feed subscriptions.

Common Operations:
==================
- create() / update()      → Subscription metadata; optional category
- delete()                 → Cascades to entries and their tag links
- feed_with_id()           → Feed with its category, or None
- list_uncategorized()     → Page through feeds outside any category
- mark() / stats()         → Bulk marking and counts over the feed's entries

Cascade on Delete:
==================
    DELETE FROM entry_tags WHERE entry_id IN (entries of the feed)
    DELETE FROM entries    WHERE feed_id = :feed
    DELETE FROM feeds      WHERE id = :feed

All three run in the caller's unit of work, so a concurrent reader sees
either the whole feed or none of it. Tags and categories are untouched.
"""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from syndication.core.exceptions import CategoryNotFoundError, FeedNotFoundError
from syndication.core.logging import logger
from syndication.models.category import Category
from syndication.models.entry import Entry
from syndication.models.entry_tag import EntryTag
from syndication.models.enums import Marker
from syndication.models.feed import Feed
from syndication.models.user import User
from syndication.repositories import marking, scopes
from syndication.repositories.base import OwnedRepository
from syndication.repositories.pagination import paginate
from syndication.repositories.stats import entry_stats
from syndication.schemas.common import Page, Stats


class FeedRepository(OwnedRepository[Feed]):
    """
    Repository for Feed database operations.
    """

    not_found_error = FeedNotFoundError

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Feed, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def feed_with_id(self, user: User, feed_id: str) -> Optional[Feed]:
        """
        Get one of the user's feeds, with its category loaded.

        Returns:
            Feed if found, None otherwise
        """
        return await self.with_id(user, feed_id)

    async def list_uncategorized(self, user: User, page: Page) -> tuple[list[Feed], str]:
        """Page through the user's feeds that belong to no category."""
        stmt = select(Feed).where(Feed.user_id == user.id, Feed.category_id.is_(None))
        return await paginate(self.session, stmt, page, model=Feed, owner=user)

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE / UPDATE / DELETE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(
        self,
        user: User,
        title: str,
        subscription: str,
        category_id: Optional[str] = None,
    ) -> Feed:
        """
        Create a feed, optionally inside a category.

        Args:
            user: Owner
            title: Display title
            subscription: Source URL
            category_id: api_id of one of the user's categories

        Returns:
            Created Feed

        Raises:
            CategoryNotFoundError: If category_id is given but not the user's
        """
        category = None
        if category_id:
            category = await self.find_owned(Category, user, category_id)
            if category is None:
                raise CategoryNotFoundError(category_id)

        feed = await self._create(
            user_id=user.id,
            title=title,
            subscription=subscription,
            category=category,
        )
        logger.info("Feed created", user_id=user.api_id, feed_id=feed.api_id)
        return feed

    async def update(
        self,
        user: User,
        feed_id: str,
        *,
        title: Optional[str] = None,
        subscription: Optional[str] = None,
    ) -> Feed:
        """
        Update feed metadata. Fields left as None are not changed.

        Raises:
            FeedNotFoundError: If the feed is not the user's
        """
        feed = await self.require(user, feed_id)
        if title is not None:
            feed.title = title
        if subscription is not None:
            feed.subscription = subscription
        return await self._save(feed)

    async def delete(self, user: User, feed_id: str) -> None:
        """
        Delete a feed together with its entries and their tag links.

        Raises:
            FeedNotFoundError: If the feed is not the user's
        """
        feed = await self.require(user, feed_id)

        feed_entries = select(Entry.id).where(Entry.feed_id == feed.id)
        await self.session.execute(
            delete(EntryTag)
            .where(EntryTag.entry_id.in_(feed_entries))
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(
            delete(Entry)
            .where(Entry.feed_id == feed.id)
            .execution_options(synchronize_session=False)
        )
        await self.session.delete(feed)
        await self.session.flush()

        logger.info(
            "Feed deleted",
            user_id=user.api_id,
            feed_id=feed_id,
            entries_deleted=result.rowcount,
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # MARKING & STATS
    # ═══════════════════════════════════════════════════════════════════════════

    async def mark(self, user: User, feed_id: str, marker: Marker) -> int:
        """
        Mark every entry of a feed.

        Returns:
            Number of entries matched

        Raises:
            FeedNotFoundError: If the feed is not the user's
        """
        feed = await self.require(user, feed_id)
        count = await marking.mark_entries(
            self.session,
            marker,
            scopes.owned_entries(user),
            scopes.in_feed(feed),
        )
        logger.info(
            "Feed marked",
            user_id=user.api_id,
            feed_id=feed_id,
            marker=marker.value,
            count=count,
        )
        return count

    async def stats(self, user: User, feed_id: str) -> Stats:
        """
        Entry counts for one feed.

        Raises:
            FeedNotFoundError: If the feed is not the user's
        """
        feed = await self.require(user, feed_id)
        return await entry_stats(self.session, scopes.owned_entries(user), scopes.in_feed(feed))
