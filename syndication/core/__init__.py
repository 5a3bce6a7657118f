"""
Core Module

Provides core functionality shared across the storage layer:
- Structured logging
- Custom exceptions

Usage:
======
    from syndication.core.logging import logger, get_logger
    from syndication.core.exceptions import SyndicationException, NotFoundError

    logger.info("Starting operation", user_id=user_id)
"""

from syndication.core.logging import (
    logger,
    get_logger,
    unit_of_work_context,
)
from syndication.core.exceptions import (
    SyndicationException,
    NotFoundError,
    UserNotFoundError,
    CategoryNotFoundError,
    FeedNotFoundError,
    EntryNotFoundError,
    TagNotFoundError,
    ValidationError,
    ConflictError,
    UserConflictError,
    CategoryConflictError,
    TagConflictError,
    StorageError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "unit_of_work_context",
    # Exceptions
    "SyndicationException",
    "NotFoundError",
    "UserNotFoundError",
    "CategoryNotFoundError",
    "FeedNotFoundError",
    "EntryNotFoundError",
    "TagNotFoundError",
    "ValidationError",
    "ConflictError",
    "UserConflictError",
    "CategoryConflictError",
    "TagConflictError",
    "StorageError",
]
