"""
User Repository

Database operations specific to the User model.

Common Operations:
==================
- create()          → Register a new owner
- user_with_id()    → Resolve the opaque identity callers pass in
- user_with_name()  → Look up by username

Usage Example:
==============
    async def handle(database: Database, identity: str):
        async with database.session() as session:
            user = await UserRepository(session).user_with_id(identity)
            if user is None:
                raise UserNotFoundError(identity)
            ...
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from syndication.core.exceptions import UserConflictError, ValidationError
from syndication.core.logging import logger
from syndication.models.user import User
from syndication.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """
    Repository for User database operations.

    Users are never deleted by the storage layer.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    async def user_with_id(self, api_id: str) -> Optional[User]:
        """
        Get a user by external identity.

        Returns:
            User if found, None otherwise
        """
        result = await self.session.execute(select(User).where(User.api_id == api_id))
        return result.scalar_one_or_none()

    async def user_with_name(self, username: str) -> Optional[User]:
        """
        Get a user by username.

        Returns:
            User if found, None otherwise
        """
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def create(self, username: str) -> User:
        """
        Create a new user with a fresh api_id.

        Args:
            username: Unique login name

        Returns:
            Created User

        Raises:
            ValidationError: If the username is blank
            UserConflictError: If the username is taken
        """
        username = username.strip()
        if not username:
            raise ValidationError("Username must not be empty", details={"field": "username"})

        if await self.user_with_name(username) is not None:
            raise UserConflictError(username)

        try:
            user = await self._create(username=username)
        except IntegrityError as e:
            raise UserConflictError(username) from e

        logger.info("User created", user_id=user.api_id)
        return user
