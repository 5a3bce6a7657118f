"""
Marking

Bulk read/unread transitions for entries.

Each call is a single UPDATE statement, so within the caller's unit of
work either every matching entry changes or (on rollback) none do.
Re-applying the current state is harmless: the statement simply writes
the same value again.

Entries already loaded in the session are not refreshed here; every
repository read uses populate_existing and picks up the new marker.

Usage:
======
    from syndication.repositories import marking, scopes

    changed = await marking.mark_entries(
        session,
        Marker.READ,
        scopes.owned_entries(user),
        scopes.in_feed(feed),
    )
"""

from typing import Any

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from syndication.models.entry import Entry
from syndication.models.enums import Marker


async def mark_entries(session: AsyncSession, marker: Marker, *criteria: Any) -> int:
    """
    Set the marker of every entry matching `criteria`.

    Args:
        session: Active session
        marker: New marker
        *criteria: WHERE clauses (always include an ownership scope)

    Returns:
        Number of entries matched
    """
    result = await session.execute(
        update(Entry)
        .where(*criteria)
        .values(mark=marker)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount

