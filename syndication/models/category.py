"""
Category Entity Model

Named, user-owned grouping of feeds.

A feed belongs to at most one category. Deleting a category leaves its
feeds in place, uncategorized (feeds.category_id is set to NULL).

SAMPLE CATEGORY RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 3                                                         │
│ api_id           │ "8c1f0c8e-3d0a-4d1b-9b39-0f3c5a0e2a11"                    │
│ user_id          │ 1                                                         │
│ name             │ "Technology"                                              │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from syndication.models.base import Base, IdentityMixin, TimestampMixin


class Category(Base, IdentityMixin, TimestampMixin):
    """
    Category model - a named folder of feeds.

    Attributes:
        user_id: Owning user (internal key)
        name: Display name, unique per user
    """

    __tablename__ = "categories"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_categories_user_name"),)

    # ═══════════════════════════════════════════════════════════════════════════
    # FOREIGN KEYS
    # ═══════════════════════════════════════════════════════════════════════════

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # CATEGORY DATA
    # ═══════════════════════════════════════════════════════════════════════════

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Category(api_id={self.api_id}, name={self.name})>"
