"""
Enums used across the storage layer.
"""

from enum import Enum
from typing import Optional


class Marker(str, Enum):
    """
    Read state of an entry.

    Every entry is in exactly one of these states. Whether an entry is
    saved is tracked separately and does not affect its marker.
    """

    UNREAD = "unread"
    READ = "read"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Marker"]:
        """
        Parse a marker filter from request input.

        Empty strings, None and "any" mean "no marker filter" and yield None.

        Raises:
            ValueError: If the value names no known marker
        """
        if value is None:
            return None
        normalized = value.strip().lower()
        if normalized in ("", "any", "all"):
            return None
        return cls(normalized)
