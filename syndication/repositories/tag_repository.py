"""
Tag Repository

Database operations for tags and their association with entries.

Common Operations:
==================
- create() / update()     → Name must be unique per user
- delete()                → Removes the tag and its links, never entries
- apply() / remove()      → Attach or detach a tag on a batch of entries
- entries()               → Page through the entries carrying a tag
- mark() / stats()        → Bulk marking and counts over tagged entries

Apply Semantics:
================
Associations are a set, backed by the (tag_id, entry_id) primary key of
entry_tags:

    apply(tag, [e1, e2, e2, bogus, other_users_entry])
        → links e1 and e2 once each
        → bogus and other_users_entry are skipped, not errors
        → calling it again links nothing new and returns 0

The links are written with one INSERT ... SELECT ... ON CONFLICT DO NOTHING,
so two units of work applying the same tag concurrently both succeed and
only one of them creates each link.

The only failure is an unknown tag (TagNotFoundError).
"""

from typing import Any, Optional, Sequence

from sqlalchemy import Integer, Table, delete, literal, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from syndication.core.exceptions import (
    StorageError,
    TagConflictError,
    TagNotFoundError,
    ValidationError,
)
from syndication.core.logging import logger
from syndication.models.entry import Entry
from syndication.models.entry_tag import EntryTag
from syndication.models.enums import Marker
from syndication.models.tag import Tag
from syndication.models.user import User
from syndication.repositories import marking, scopes
from syndication.repositories.base import OwnedRepository
from syndication.repositories.entry_repository import EntryRepository
from syndication.repositories.stats import entry_stats
from syndication.schemas.common import Page, Stats


_CONFLICT_AWARE_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _clean_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise ValidationError("Tag name must not be empty", details={"field": "name"})
    return name


class TagRepository(OwnedRepository[Tag]):
    """
    Repository for Tag database operations.

    Handles name uniqueness and the tag ↔ entry association set.
    """

    not_found_error = TagNotFoundError

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Tag, session)

    def _dialect_insert(self, table: Table) -> Any:
        """INSERT construct of the bound dialect, which supports ON CONFLICT DO NOTHING."""
        dialect = self.session.get_bind().dialect.name
        insert = _CONFLICT_AWARE_INSERTS.get(dialect)
        if insert is None:
            raise StorageError(f"Unsupported database dialect: {dialect}")
        return insert(table)

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def tag_with_id(self, user: User, tag_id: str) -> Optional[Tag]:
        """Get one of the user's tags, or None."""
        return await self.with_id(user, tag_id)

    async def tag_with_name(self, user: User, name: str) -> Optional[Tag]:
        """Get the user's tag with this exact name, or None."""
        result = await self.session.execute(
            select(Tag).where(Tag.user_id == user.id, Tag.name == name)
        )
        return result.scalar_one_or_none()

    async def entries(self, user: User, tag_id: str, page: Page) -> tuple[list[Entry], str]:
        """
        Page through the entries carrying a tag.

        Honors Page.newest and Page.marker like every other entry list.

        Raises:
            TagNotFoundError: If the tag is not the user's
        """
        return await EntryRepository(self.session).list_from_tags(user, [tag_id], page)

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE / UPDATE / DELETE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, user: User, name: str) -> Tag:
        """
        Create a tag with an empty association set.

        Raises:
            ValidationError: If the name is blank
            TagConflictError: If the user already has a tag with this name
        """
        name = _clean_name(name)
        if await self.tag_with_name(user, name) is not None:
            raise TagConflictError(name)

        # A concurrent writer can still win the race; the unique
        # constraint catches it
        try:
            tag = await self._create(user_id=user.id, name=name)
        except IntegrityError as e:
            raise TagConflictError(name) from e

        logger.info("Tag created", user_id=user.api_id, tag_id=tag.api_id)
        return tag

    async def update(self, user: User, tag_id: str, name: str) -> Tag:
        """
        Rename a tag.

        Raises:
            TagNotFoundError: If the tag is not the user's
            TagConflictError: If another of the user's tags has the name
        """
        tag = await self.require(user, tag_id)
        name = _clean_name(name)
        if name == tag.name:
            return tag

        if await self.tag_with_name(user, name) is not None:
            raise TagConflictError(name)

        tag.name = name
        try:
            return await self._save(tag)
        except IntegrityError as e:
            raise TagConflictError(name) from e

    async def delete(self, user: User, tag_id: str) -> None:
        """
        Delete a tag and every association it has. Entries are kept.

        Raises:
            TagNotFoundError: If the tag is not the user's
        """
        tag = await self.require(user, tag_id)

        await self.session.execute(
            delete(EntryTag)
            .where(EntryTag.tag_id == tag.id)
            .execution_options(synchronize_session=False)
        )
        await self.session.delete(tag)
        await self.session.flush()

        logger.info("Tag deleted", user_id=user.api_id, tag_id=tag_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # ASSOCIATION OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def apply(self, user: User, tag_id: str, entry_ids: Sequence[str]) -> int:
        """
        Attach a tag to a batch of entries.

        Entry ids that are unknown, belong to another user or already carry
        the tag are skipped.

        Args:
            user: Owner
            tag_id: api_id of the tag
            entry_ids: api_ids of the entries to tag

        Returns:
            Number of newly created associations

        Raises:
            TagNotFoundError: If the tag is not the user's
        """
        tag = await self.require(user, tag_id)
        if not entry_ids:
            return 0

        wanted = set(entry_ids)
        candidates = select(literal(tag.id, Integer), Entry.id).where(
            scopes.owned_entries(user),
            Entry.api_id.in_(list(wanted)),
        )
        # Links committed by a concurrent apply are skipped by the conflict clause
        stmt = (
            self._dialect_insert(EntryTag.__table__)
            .from_select(["tag_id", "entry_id"], candidates)
            .on_conflict_do_nothing(index_elements=["tag_id", "entry_id"])
        )
        result = await self.session.execute(stmt)
        tagged = result.rowcount

        skipped = len(wanted) - tagged
        logger.info(
            "Tag applied",
            user_id=user.api_id,
            tag_id=tag_id,
            tagged=tagged,
            skipped=skipped,
        )
        return tagged

    async def remove(self, user: User, tag_id: str, entry_ids: Sequence[str]) -> int:
        """
        Detach a tag from a batch of entries.

        Entries that do not carry the tag (or are not the user's) are skipped.

        Returns:
            Number of associations removed

        Raises:
            TagNotFoundError: If the tag is not the user's
        """
        tag = await self.require(user, tag_id)
        if not entry_ids:
            return 0

        owned = select(Entry.id).where(
            scopes.owned_entries(user),
            Entry.api_id.in_(set(entry_ids)),
        )
        result = await self.session.execute(
            delete(EntryTag)
            .where(EntryTag.tag_id == tag.id, EntryTag.entry_id.in_(owned))
            .execution_options(synchronize_session=False)
        )

        logger.info("Tag removed", user_id=user.api_id, tag_id=tag_id, removed=result.rowcount)
        return result.rowcount

    # ═══════════════════════════════════════════════════════════════════════════
    # MARKING & STATS
    # ═══════════════════════════════════════════════════════════════════════════

    async def mark(self, user: User, tag_id: str, marker: Marker) -> int:
        """
        Mark every entry carrying the tag.

        Returns:
            Number of entries matched

        Raises:
            TagNotFoundError: If the tag is not the user's
        """
        tag = await self.require(user, tag_id)
        count = await marking.mark_entries(
            self.session,
            marker,
            scopes.owned_entries(user),
            scopes.tagged_with([tag.id]),
        )
        logger.info(
            "Tag marked",
            user_id=user.api_id,
            tag_id=tag_id,
            marker=marker.value,
            count=count,
        )
        return count

    async def stats(self, user: User, tag_id: str) -> Stats:
        """
        Entry counts over the entries carrying the tag.

        Raises:
            TagNotFoundError: If the tag is not the user's
        """
        tag = await self.require(user, tag_id)
        return await entry_stats(
            self.session,
            scopes.owned_entries(user),
            scopes.tagged_with([tag.id]),
        )
