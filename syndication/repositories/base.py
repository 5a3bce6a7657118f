"""
Base Repository

This module provides the generic repositories every entity repository
inherits from.

What This Provides:
===================
BaseRepository
- _create()          → INSERT a record and reload DB-generated values
- _save()            → Flush pending changes and reload the record

OwnedRepository (adds ownership scoping)
- with_id()          → Fetch one of the user's records by api_id, or None
- require()          → Same, but raise the repository's NotFoundError
- find_owned()       → with_id() for any other owned model
- list()             → One cursor page of the user's records
- delete()           → Hard delete; NotFoundError when missing

Generic Type Pattern:
=====================
    class FeedRepository(OwnedRepository[Feed]):
        not_found_error = FeedNotFoundError

    repo = FeedRepository(session)
    feed = await repo.with_id(user, feed_id)  # Returns Optional[Feed]

Ownership:
==========
Every owned read and write filters on `user_id = :owner`. A record that
exists but belongs to someone else is indistinguishable from one that
does not exist: both come back as None / NotFoundError.

┌─────────────────────────────────────────────────────────────────────────────┐
│                        OWNED READ                                           │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   SELECT * FROM feeds                                                       │
│   WHERE api_id = :api_id          ← identifier supplied by the caller       │
│     AND user_id = :owner          ← never trusted to match on its own       │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

flush() vs commit():
====================
Repository methods only flush(). The unit of work opened with
Database.session() commits once the whole external call succeeds and
rolls back if anything raises.
"""

from typing import Any, ClassVar, Generic, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from syndication.core.exceptions import NotFoundError
from syndication.models.base import Base
from syndication.models.user import User
from syndication.repositories.pagination import paginate
from syndication.schemas.common import Page


# TypeVar bound to Base ensures we only work with SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)
OwnedType = TypeVar("OwnedType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository holding the model class and the session.

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session of the current unit of work
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        """
        Initialize the repository.

        Args:
            model: SQLAlchemy model class (e.g., Feed, Tag)
            session: Async database session from Database.session()
        """
        self.model = model
        self.session = session

    async def _create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        Adds the instance, flushes to send the INSERT (without committing)
        and refreshes to pick up DB-generated values such as id,
        api_id and created_at.

        Args:
            **kwargs: Field values for the new record

        Returns:
            The created model instance
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def _save(self, instance: ModelType) -> ModelType:
        """Flush changes made to `instance` and reload it."""
        await self.session.flush()
        await self.session.refresh(instance)
        return instance


class OwnedRepository(BaseRepository[ModelType]):
    """
    Base for repositories of records owned by a user.

    Subclasses set `not_found_error` to the NotFoundError subclass raised
    by require() and delete().

    Example:
        class TagRepository(OwnedRepository[Tag]):
            not_found_error = TagNotFoundError

            def __init__(self, session: AsyncSession) -> None:
                super().__init__(Tag, session)
    """

    not_found_error: ClassVar[Type[NotFoundError]]

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def find_owned(
        self,
        model: Type[OwnedType],
        user: User,
        api_id: str,
    ) -> Optional[OwnedType]:
        """
        Get one of the user's records of any owned model.

        Used by repositories that need to resolve a related entity (the
        feed an entry is created under, the category a feed moves to).

        Args:
            model: Owned model class
            user: Owner
            api_id: External identifier

        Returns:
            The record, or None if missing or owned by another user
        """
        if not api_id:
            return None
        result = await self.session.execute(
            select(model)
            .where(model.api_id == api_id, model.user_id == user.id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def with_id(self, user: User, api_id: str) -> Optional[ModelType]:
        """
        Get one of the user's records by api_id.

        Args:
            user: Owner
            api_id: External identifier

        Returns:
            The record if found, None otherwise
        """
        return await self.find_owned(self.model, user, api_id)

    async def require(self, user: User, api_id: str) -> ModelType:
        """
        Get one of the user's records or raise.

        Raises:
            NotFoundError: The repository's not_found_error subclass
        """
        instance = await self.with_id(user, api_id)
        if instance is None:
            raise self.not_found_error(api_id)
        return instance

    async def list(self, user: User, page: Page) -> tuple[list[ModelType], str]:
        """
        List the user's records in insertion order.

        Args:
            user: Owner
            page: Cursor and count

        Returns:
            Tuple of (records, next_continuation_id)
        """
        stmt = select(self.model).where(self.model.user_id == user.id)
        return await paginate(self.session, stmt, page, model=self.model, owner=user)

    # ═══════════════════════════════════════════════════════════════════════════
    # DELETE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete(self, user: User, api_id: str) -> None:
        """
        Hard delete one of the user's records.

        Subclasses with dependent rows override this to clean them up in
        the same unit of work.

        Raises:
            NotFoundError: If the record is missing or not the user's
        """
        instance = await self.require(user, api_id)
        await self.session.delete(instance)
        await self.session.flush()
