"""
EntryTag Entity Model

Junction table linking Tags to Entries.

The composite primary key makes the association a set: a tag is either
applied to an entry or it is not, and applying it twice stores one row.

SAMPLE ENTRY_TAG RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ tag_id           │ 5                                                         │
│ entry_id         │ 42                                                        │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from syndication.models.base import Base


class EntryTag(Base):
    """
    EntryTag model - links a tag to an entry.

    Rows disappear with either side: deleting a tag or deleting the
    entry's feed removes the link.

    Attributes:
        tag_id: The applied tag (part of composite PK)
        entry_id: The tagged entry (part of composite PK)
    """

    __tablename__ = "entry_tags"

    tag_id: Mapped[int] = mapped_column(
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    )

    entry_id: Mapped[int] = mapped_column(
        ForeignKey("entries.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<EntryTag(tag_id={self.tag_id}, entry_id={self.entry_id})>"
