"""
Cursor Pagination

Deterministic, cursor-based paging shared by every repository.

How a Page Is Produced:
=======================
┌─────────────────────────────────────────────────────────────────────────────┐
│                        CURSOR PAGINATION                                    │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   1. Resolve the cursor (only when continuation_id is set):                 │
│        SELECT published, id FROM entries                                    │
│        WHERE api_id = :continuation_id AND user_id = :owner                 │
│      Unknown cursor → empty page, empty token (not an error)                │
│                                                                             │
│   2. Fetch one record more than requested, starting AT the cursor:          │
│        ... WHERE <filters> AND (published, id) >= (:p, :i)                  │
│        ORDER BY published, id LIMIT :count + 1                              │
│                                                                             │
│   3. Split:                                                                 │
│        records[:count]          → the page                                  │
│        records[count].api_id    → next continuation id (or "" if absent)    │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

The cursor is inclusive: the record it names comes back as element 0.
Ordering always ends with the internal id, so it is total even when the
leading key (e.g. published) has ties, and paging a fixed data set never
skips or repeats a record.

The cursor is resolved against everything the owner has in the table,
not just the filtered candidates, so a record that stopped matching the
filter between two calls still marks where the next page begins.
"""

from typing import Any, Optional, Sequence

from sqlalchemy import Select, and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from syndication.models.user import User
from syndication.schemas.common import Page


def _at_or_after(
    sort_keys: Sequence[InstrumentedAttribute],
    cursor: Sequence[Any],
    descending: bool,
) -> Any:
    """
    Build a lexicographic (k1, k2, ...) >= (c1, c2, ...) predicate.

    Expanded into OR-of-ANDs instead of a row-value comparison so the
    per-column bind types (datetimes on SQLite in particular) are kept.
    For descending order the comparison flips to <=.
    """
    clauses = []
    last = len(sort_keys) - 1
    for i, key in enumerate(sort_keys):
        ties = [sort_keys[j] == cursor[j] for j in range(i)]
        if i == last:
            bound = key <= cursor[i] if descending else key >= cursor[i]
        else:
            bound = key < cursor[i] if descending else key > cursor[i]
        clauses.append(and_(*ties, bound))
    return or_(*clauses)


async def paginate(
    session: AsyncSession,
    stmt: Select,
    page: Page,
    *,
    model: Any,
    owner: User,
    sort_keys: Optional[Sequence[InstrumentedAttribute]] = None,
    descending: bool = False,
) -> tuple[list[Any], str]:
    """
    Fetch one page of `stmt` and the continuation id for the next one.

    Args:
        session: Active session
        stmt: SELECT of `model` with ownership and filters already applied
        page: Cursor, count and ordering parameters
        model: Model being paged (must have api_id and user_id)
        owner: User the cursor must belong to
        sort_keys: Ordering columns; must end in a unique column. Defaults
            to the internal id (insertion order)
        descending: Reverse the ordering

    Returns:
        Tuple of (records, next_continuation_id). The id is "" when the
        sequence is exhausted.
    """
    keys = tuple(sort_keys) if sort_keys else (model.id,)

    if page.continuation_id:
        result = await session.execute(
            select(*keys).where(
                model.api_id == page.continuation_id,
                model.user_id == owner.id,
            )
        )
        cursor = result.first()
        if cursor is None:
            return [], ""
        stmt = stmt.where(_at_or_after(keys, tuple(cursor), descending))

    ordering = [key.desc() if descending else key.asc() for key in keys]
    stmt = (
        stmt.order_by(*ordering)
        .limit(page.count + 1)
        .execution_options(populate_existing=True)
    )

    result = await session.execute(stmt)
    records = list(result.scalars().all())

    if len(records) > page.count:
        return records[: page.count], records[page.count].api_id
    return records, ""
