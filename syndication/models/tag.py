"""
Tag Entity Model

User-defined label that can be attached to any of the user's entries.

SAMPLE TAG RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 5                                                         │
│ api_id           │ "0e7c1a52-94b1-4f0e-8d6c-3a2b1c0d9e8f"                    │
│ user_id          │ 1                                                         │
│ name             │ "read-later"                                              │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from syndication.models.base import Base, IdentityMixin, TimestampMixin


class Tag(Base, IdentityMixin, TimestampMixin):
    """
    Tag model - a per-user label for entries.

    Attributes:
        user_id: Owning user (internal key)
        name: Label text, unique per user

    Tag to entry links live in EntryTag.
    """

    __tablename__ = "tags"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_tags_user_name"),)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Tag(api_id={self.api_id}, name={self.name})>"
