"""
Stats Aggregation

Unread / read / saved / total counts over a scope of entries.

All four numbers come from one SELECT with conditional sums, so they
describe a single snapshot of the table:

    SELECT
        SUM(CASE WHEN mark = 'unread' THEN 1 ELSE 0 END) AS unread,
        SUM(CASE WHEN mark = 'read'   THEN 1 ELSE 0 END) AS read,
        SUM(CASE WHEN saved           THEN 1 ELSE 0 END) AS saved,
        COUNT(id)                                        AS total
    FROM entries
    WHERE <scope>
"""

from typing import Any

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from syndication.models.entry import Entry
from syndication.models.enums import Marker
from syndication.schemas.common import Stats


def _count_where(condition: Any) -> Any:
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


async def entry_stats(session: AsyncSession, *criteria: Any) -> Stats:
    """
    Count entries matching `criteria`.

    Args:
        session: Active session
        *criteria: WHERE clauses (always include an ownership scope)

    Returns:
        Stats for the scope; all zeros when it is empty
    """
    stmt = select(
        _count_where(Entry.mark == Marker.UNREAD).label("unread"),
        _count_where(Entry.mark == Marker.READ).label("read"),
        _count_where(Entry.saved.is_(True)).label("saved"),
        func.count(Entry.id).label("total"),
    ).where(*criteria)

    row = (await session.execute(stmt)).one()
    return Stats(
        unread=int(row.unread),
        read=int(row.read),
        saved=int(row.saved),
        total=int(row.total),
    )
