"""
Syndication SQLAlchemy Models

This package contains all database models for the storage layer.

Model Hierarchy:
================
    User
       ├── categories (Category[])
       ├── feeds (Feed[])
       │      └── entries (Entry[])
       │             └── entry_tags (EntryTag[])
       └── tags (Tag[])
              └── entry_tags (EntryTag[])

Models Overview:
================
- Base: Base class and mixins (identity, timestamps)
- User: Account that owns everything else
- Category: Named grouping of feeds
- Feed: Subscription to a source
- Entry: Item published by a feed, with read/saved state
- Tag: User-defined label
- EntryTag: Junction table for tags and entries
"""

from syndication.models.base import Base, IdentityMixin, TimestampMixin, new_api_id
from syndication.models.enums import Marker
from syndication.models.user import User
from syndication.models.category import Category
from syndication.models.feed import Feed
from syndication.models.entry import Entry
from syndication.models.tag import Tag
from syndication.models.entry_tag import EntryTag

__all__ = [
    # Base classes and mixins
    "Base",
    "IdentityMixin",
    "TimestampMixin",
    "new_api_id",
    # Enums
    "Marker",
    # Models
    "User",
    "Category",
    "Feed",
    "Entry",
    "Tag",
    "EntryTag",
]
