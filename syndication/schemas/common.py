"""
Common Schemas

Parameter and result models shared by every repository.

Schema Types:
=============
- BaseSchema: Base with common config (from_attributes, populate_by_name)
- Page: Cursor pagination request (continuation id, count, order, marker)
- Stats: Entry counts for a feed, category, tag or the whole user

Usage:
======
    from syndication.schemas.common import Page, Stats

    entries, next_id = await entry_repo.list(user, Page(count=20, newest=True))
    while next_id:
        more, next_id = await entry_repo.list(user, Page(continuation_id=next_id, count=20))
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from syndication.config.settings import settings
from syndication.models.enums import Marker


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    Provides:
    - from_attributes: Allow creating from ORM models
    - populate_by_name: Allow field population by name or alias
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# PAGINATION
# ═══════════════════════════════════════════════════════════════════════════════


class Page(BaseSchema):
    """
    Cursor pagination parameters.

    The continuation id is inclusive: the record it names is the first
    element of the returned page. An empty continuation id starts from the
    beginning of the sequence.

    `count` is clamped rather than rejected: non-positive values fall back
    to PAGE_SIZE_DEFAULT and anything above PAGE_SIZE_MAX is capped.

    Example:
        Page(count=2)                                  # first two records
        Page(continuation_id=next_id, count=3)         # next three, inclusive
        Page(count=10, newest=True, marker=Marker.UNREAD)
    """

    continuation_id: str = Field(default="", alias="continuationId")
    count: int = Field(default_factory=lambda: settings.PAGE_SIZE_DEFAULT)
    newest: bool = False
    marker: Optional[Marker] = None

    @field_validator("continuation_id", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("count", mode="before")
    @classmethod
    def _clamp_count(cls, value: Any) -> Any:
        if value is None:
            return settings.PAGE_SIZE_DEFAULT
        count = int(value)
        if count <= 0:
            return settings.PAGE_SIZE_DEFAULT
        return min(count, settings.PAGE_SIZE_MAX)

    @field_validator("marker", mode="before")
    @classmethod
    def _parse_marker(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Marker.parse(value)
        return value


# ═══════════════════════════════════════════════════════════════════════════════
# AGGREGATES
# ═══════════════════════════════════════════════════════════════════════════════


class Stats(BaseSchema):
    """
    Entry counts for a scope.

    total always equals unread + read; saved overlaps both.
    """

    unread: int = 0
    read: int = 0
    saved: int = 0
    total: int = 0
