"""
Database Module

Connectivity and unit-of-work management for the storage layer.

Architecture Overview:
======================
┌─────────────────────────────────────────────────────────────────────────────┐
│                        DATABASE LAYER                                       │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   External collaborator (HTTP controller, worker, test)                     │
│       │                                                                     │
│       │  async with database.session() as session                           │
│       ▼                                                                     │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │              AsyncSession (from session.py)                 │          │
│   │                                                             │          │
│   │  - One session per external call                            │          │
│   │  - Commit on success, rollback on exception                 │          │
│   │  - SQLAlchemy failures surface as StorageError              │          │
│   └─────────────────────────────────────────────────────────────┘          │
│       │                                                                     │
│       │  Passed to Repository                                               │
│       ▼                                                                     │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │              Repository (from repositories/)                │          │
│   │                                                             │          │
│   │  - UserRepository      - FeedRepository                     │          │
│   │  - CategoryRepository  - EntryRepository                    │          │
│   │  - TagRepository                                            │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘
"""

from syndication.db.session import Database, create_engine_for_url

__all__ = [
    "Database",
    "create_engine_for_url",
]
