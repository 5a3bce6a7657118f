"""
Schemas Package

Pydantic models for repository parameters and aggregate results.
"""

from syndication.schemas.common import BaseSchema, Page, Stats

__all__ = [
    "BaseSchema",
    "Page",
    "Stats",
]
