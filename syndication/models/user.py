"""
User Entity Model

Owner of every feed, category, tag and entry in the system.

Authentication lives outside the storage layer; here a user is only an
opaque identity plus a unique username.

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 1                                                         │
│ api_id           │ "550e8400-e29b-41d4-a716-446655440000"                    │
│ username         │ "jdoe"                                                    │
│ created_at       │ 2024-01-01T00:00:00Z                                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from syndication.models.base import Base, IdentityMixin, TimestampMixin


class User(Base, IdentityMixin, TimestampMixin):
    """
    User model representing a feed reader account.

    Attributes:
        id: Internal key
        api_id: External identity handed to the storage layer by callers
        username: Unique login name
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(api_id={self.api_id}, username={self.username})>"
