"""
Entry Entity Model

A single item published by a feed.

Entries are written by the ingestion path and afterwards only change
through marking (read/unread) and saving. They are removed only when
their feed is deleted.

SAMPLE ENTRY RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 42                                                        │
│ api_id           │ "f3a9c2d1-7b4e-4c8a-9e1f-2d3c4b5a6e7f"                    │
│ user_id          │ 1                                                         │
│ feed_id          │ 7                                                         │
│ title            │ "Release notes for 2.0"                                   │
│ author           │ "John Doe"                                                │
│ link             │ "https://example.com/posts/2-0"                           │
│ published        │ 2024-01-15T10:30:00Z                                      │
│ mark             │ unread                                                    │
│ saved            │ false                                                     │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, DateTime, Enum as SQLEnum, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from syndication.models.base import Base, IdentityMixin, TimestampMixin
from syndication.models.enums import Marker


if TYPE_CHECKING:
    from syndication.models.feed import Feed


class Entry(Base, IdentityMixin, TimestampMixin):
    """
    Entry model - one article or post from a feed.

    Attributes:
        user_id: Owning user, denormalized from the feed for scoped queries
        feed_id: Parent feed
        title, author, link, description: Content metadata
        guid: Identifier assigned by the source, if any
        published: Publication time, the primary sort key for entry lists
        mark: Marker.UNREAD or Marker.READ
        saved: Independent "saved for later" flag

    Relationships:
        feed: Parent feed, eagerly loaded
    """

    __tablename__ = "entries"
    __table_args__ = (
        Index("ix_entries_user_published", "user_id", "published", "id"),
        Index("ix_entries_feed_published", "feed_id", "published", "id"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # FOREIGN KEYS
    # ═══════════════════════════════════════════════════════════════════════════

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    feed_id: Mapped[int] = mapped_column(
        ForeignKey("feeds.id", ondelete="CASCADE"),
        nullable=False,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # CONTENT METADATA
    # ═══════════════════════════════════════════════════════════════════════════

    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    author: Mapped[str] = mapped_column(Text, nullable=False, default="")
    link: Mapped[str] = mapped_column(Text, nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    guid: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    published: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # USER STATE
    # ═══════════════════════════════════════════════════════════════════════════

    mark: Mapped[Marker] = mapped_column(
        SQLEnum(
            Marker,
            name="marker",
            values_callable=lambda markers: [m.value for m in markers],
        ),
        nullable=False,
        default=Marker.UNREAD,
    )

    saved: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    feed: Mapped["Feed"] = relationship(
        "Feed",
        lazy="joined",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Entry(api_id={self.api_id}, mark={self.mark.value}, saved={self.saved})>"
