"""
Logging Configuration

structlog setup for the storage layer.

Log Output:
===========
Development:
    2024-01-15 10:30:00 [info     ] Tag applied    unit_of_work=3f2a9c1b7d04 tag_id=0e7c... tagged=2 skipped=1

Production (JSON):
    {"timestamp": "2024-01-15T10:30:00", "level": "info", "event": "Tag applied", "unit_of_work": "3f2a9c1b7d04", ...}

Unit of Work Correlation:
=========================
Database.session() opens every unit of work inside unit_of_work_context(),
so each line a repository logs during one external call carries the same
`unit_of_work` id, including the rollback error if the call fails:

    async with database.session() as session:       ← binds unit_of_work
        await FeedRepository(session).mark(...)     ← "Feed marked" unit_of_work=...
                                                    ← unbound on exit

Usage:
======
    from syndication.core.logging import logger, get_logger

    logger.info("Entries marked", user_id=user.api_id, marker="read", count=12)

    db_logger = get_logger("syndication.db")
"""

from contextlib import contextmanager
import logging
import sys
from typing import Any, Iterator
import uuid

import structlog
from structlog.typing import Processor

from syndication.config.settings import settings


def setup_logging() -> None:
    """
    Configure structlog and the stdlib root logger.

    Development renders colored console lines, every other environment
    renders JSON. Called once when this module is imported.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper()),
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.is_development:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.extend(
            [
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ]
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, optionally named."""
    return structlog.get_logger(name)


@contextmanager
def unit_of_work_context(**kwargs: Any) -> Iterator[str]:
    """
    Bind a fresh `unit_of_work` id to every log line emitted inside the block.

    Extra keyword arguments are bound alongside it. Everything bound here
    is removed again on exit, so sequential units of work never share
    context.

    Yields:
        The unit_of_work id
    """
    unit_id = uuid.uuid4().hex[:12]
    with structlog.contextvars.bound_contextvars(unit_of_work=unit_id, **kwargs):
        yield unit_id


setup_logging()

logger = get_logger("syndication")
