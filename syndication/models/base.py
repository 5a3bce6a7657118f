"""
Base Model Classes

This module provides the foundational classes for all SQLAlchemy models.
It includes the declarative base and common mixins for identifiers and
timestamps.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       ├── IdentityMixin    ← Internal integer key + external api_id
       │
       └── TimestampMixin   ← Automatic created_at/updated_at

Identifiers:
============
Every entity carries two keys:

    id      INTEGER  internal row key; used for joins, ordering and
                     foreign keys; never leaves the storage layer
    api_id  VARCHAR  UUID4 string; the only identifier callers see and
                     the only one accepted as input

Usage:
======
    from syndication.models.base import Base, IdentityMixin, TimestampMixin

    class Feed(Base, IdentityMixin, TimestampMixin):
        __tablename__ = "feeds"
        title: Mapped[str] = mapped_column(Text)
"""

from datetime import datetime, timezone
import uuid

from sqlalchemy import DateTime, Integer, String, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def new_api_id() -> str:
    """Generate a fresh external identifier."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    All models in the storage layer inherit from this class. Its metadata
    is what alembic autogenerate and Database.create_all() operate on.
    """


class IdentityMixin:
    """
    Mixin that adds the internal primary key and the external api_id.

    Attributes:
        id: Autoincrementing internal key (insertion order)
        api_id: Globally unique external identifier
    """

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    api_id: Mapped[str] = mapped_column(
        String(36),
        unique=True,
        nullable=False,
        default=new_api_id,
    )


class TimestampMixin:
    """
    Mixin that adds automatic timestamp tracking to models.

    Database Behavior:
    ==================
    - created_at: Set by the database on INSERT via server_default
    - updated_at: Set on INSERT, updated by SQLAlchemy on UPDATE via onupdate
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
