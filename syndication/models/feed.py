"""
Feed Entity Model

A user's subscription to a syndication source.

Model Hierarchy:
================
    User
       └── Feed
              ├── category (Category, optional)
              └── entries (Entry[]) - deleted with the feed

SAMPLE FEED RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 7                                                         │
│ api_id           │ "2b0d7b3e-6f2a-4d6c-8a3e-5d7b9f1c0e42"                    │
│ user_id          │ 1                                                         │
│ category_id      │ 3 (or NULL when uncategorized)                            │
│ title            │ "Example Blog"                                            │
│ subscription     │ "https://example.com/feed.xml"                            │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from syndication.models.base import Base, IdentityMixin, TimestampMixin


if TYPE_CHECKING:
    from syndication.models.category import Category


class Feed(Base, IdentityMixin, TimestampMixin):
    """
    Feed model - a subscription owned by one user.

    Attributes:
        user_id: Owning user (internal key)
        category_id: Optional category (internal key)
        title: Display title
        subscription: Source URL the fetcher polls

    Relationships:
        category: Eagerly loaded so a returned feed always carries its category
    """

    __tablename__ = "feeds"

    # ═══════════════════════════════════════════════════════════════════════════
    # FOREIGN KEYS
    # ═══════════════════════════════════════════════════════════════════════════

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    category_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # FEED DATA
    # ═══════════════════════════════════════════════════════════════════════════

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    subscription: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    category: Mapped[Optional["Category"]] = relationship(
        "Category",
        lazy="joined",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Feed(api_id={self.api_id}, title={self.title})>"
