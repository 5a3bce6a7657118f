"""
Category Repository

Database operations for user-defined feed categories.

Common Operations:
==================
- create() / update()     → Name must be unique per user
- delete()                → Feeds in the category become uncategorized
- feeds()                 → Page through the category's feeds
- add_feed()              → Move a feed into the category
- mark() / stats()        → Bulk marking and counts over every feed in it
"""

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from syndication.core.exceptions import (
    CategoryConflictError,
    CategoryNotFoundError,
    FeedNotFoundError,
    ValidationError,
)
from syndication.core.logging import logger
from syndication.models.category import Category
from syndication.models.enums import Marker
from syndication.models.feed import Feed
from syndication.models.user import User
from syndication.repositories import marking, scopes
from syndication.repositories.base import OwnedRepository
from syndication.repositories.pagination import paginate
from syndication.repositories.stats import entry_stats
from syndication.schemas.common import Page, Stats


def _clean_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise ValidationError("Category name must not be empty", details={"field": "name"})
    return name


class CategoryRepository(OwnedRepository[Category]):
    """
    Repository for Category database operations.

    Handles name uniqueness, feed membership and category-wide
    marking and stats.
    """

    not_found_error = CategoryNotFoundError

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Category, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def category_with_id(self, user: User, category_id: str) -> Optional[Category]:
        """Get one of the user's categories, or None."""
        return await self.with_id(user, category_id)

    async def category_with_name(self, user: User, name: str) -> Optional[Category]:
        """Get the user's category with this exact name, or None."""
        result = await self.session.execute(
            select(Category).where(Category.user_id == user.id, Category.name == name)
        )
        return result.scalar_one_or_none()

    async def feeds(self, user: User, category_id: str, page: Page) -> tuple[list[Feed], str]:
        """
        Page through the feeds in a category, in creation order.

        Raises:
            CategoryNotFoundError: If the category is not the user's
        """
        category = await self.require(user, category_id)
        stmt = select(Feed).where(Feed.user_id == user.id, Feed.category_id == category.id)
        return await paginate(self.session, stmt, page, model=Feed, owner=user)

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE / UPDATE / DELETE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, user: User, name: str) -> Category:
        """
        Create a category.

        Raises:
            CategoryConflictError: If the user already has a category with this name
        """
        name = _clean_name(name)
        if await self.category_with_name(user, name) is not None:
            raise CategoryConflictError(name)

        try:
            category = await self._create(user_id=user.id, name=name)
        except IntegrityError as e:
            raise CategoryConflictError(name) from e

        logger.info("Category created", user_id=user.api_id, category_id=category.api_id)
        return category

    async def update(self, user: User, category_id: str, name: str) -> Category:
        """
        Rename a category.

        Raises:
            CategoryNotFoundError: If the category is not the user's
            CategoryConflictError: If another of the user's categories has the name
        """
        category = await self.require(user, category_id)
        name = _clean_name(name)
        if name == category.name:
            return category

        if await self.category_with_name(user, name) is not None:
            raise CategoryConflictError(name)

        category.name = name
        try:
            return await self._save(category)
        except IntegrityError as e:
            raise CategoryConflictError(name) from e

    async def delete(self, user: User, category_id: str) -> None:
        """
        Delete a category, leaving its feeds uncategorized.

        Raises:
            CategoryNotFoundError: If the category is not the user's
        """
        category = await self.require(user, category_id)

        await self.session.execute(
            update(Feed)
            .where(Feed.user_id == user.id, Feed.category_id == category.id)
            .values(category_id=None)
            .execution_options(synchronize_session=False)
        )
        await self.session.delete(category)
        await self.session.flush()

        logger.info("Category deleted", user_id=user.api_id, category_id=category_id)

    async def add_feed(self, user: User, category_id: str, feed_id: str) -> Feed:
        """
        Move a feed into a category.

        Returns:
            The updated feed

        Raises:
            CategoryNotFoundError: If the category is not the user's
            FeedNotFoundError: If the feed is not the user's
        """
        category = await self.require(user, category_id)
        feed = await self.find_owned(Feed, user, feed_id)
        if feed is None:
            raise FeedNotFoundError(feed_id)

        feed.category = category
        return await self._save(feed)

    # ═══════════════════════════════════════════════════════════════════════════
    # MARKING & STATS
    # ═══════════════════════════════════════════════════════════════════════════

    async def mark(self, user: User, category_id: str, marker: Marker) -> int:
        """
        Mark every entry of every feed in the category.

        Returns:
            Number of entries matched

        Raises:
            CategoryNotFoundError: If the category is not the user's
        """
        category = await self.require(user, category_id)
        count = await marking.mark_entries(
            self.session,
            marker,
            scopes.owned_entries(user),
            scopes.in_category(category),
        )
        logger.info(
            "Category marked",
            user_id=user.api_id,
            category_id=category_id,
            marker=marker.value,
            count=count,
        )
        return count

    async def stats(self, user: User, category_id: str) -> Stats:
        """
        Entry counts summed over every feed in the category.

        Raises:
            CategoryNotFoundError: If the category is not the user's
        """
        category = await self.require(user, category_id)
        return await entry_stats(
            self.session,
            scopes.owned_entries(user),
            scopes.in_category(category),
        )
