"""
Syndication Storage

Persistence and query layer of a multi-user feed reader.

Package Structure:
==================
    syndication/
    ├── config/         ← Settings (pydantic-settings)
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database handle and unit of work
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Feeds, entries, categories, tags, users
    ├── schemas/        ← Page and Stats models
    └── migrations/     ← Alembic environment and revisions

Usage:
======
    from syndication.db import Database
    from syndication.repositories import FeedRepository, UserRepository

    database = Database()
    async with database.session() as session:
        user = await UserRepository(session).user_with_id(identity)
        feeds, next_id = await FeedRepository(session).list(user, Page(count=20))
"""

__version__ = "1.0.0"
