"""
Custom Exceptions

Storage-layer exceptions with HTTP status codes and error codes.

The repository layer never renders responses itself, but every exception
carries the status code and machine-readable code the HTTP collaborator
needs to do so.

Exception Hierarchy:
====================
    SyndicationException (base, 500)
       │
       ├── NotFoundError (404)          ← Entity absent or owned by another user
       │      ├── UserNotFoundError
       │      ├── CategoryNotFoundError
       │      ├── FeedNotFoundError
       │      ├── EntryNotFoundError
       │      └── TagNotFoundError
       ├── ConflictError (409)          ← Uniqueness constraint violated
       │      ├── UserConflictError
       │      ├── CategoryConflictError
       │      └── TagConflictError
       ├── ValidationError (400)        ← Invalid input data
       └── StorageError (500)           ← Persistence failure (opaque)

Usage:
======
    from syndication.core.exceptions import TagNotFoundError, TagConflictError

    raise TagNotFoundError(tag_id)
    # {"error": {"code": "NOT_FOUND", "message": "Tag with id 'abc' not found"}}

    raise TagConflictError("news")
    # {"error": {"code": "CONFLICT", "message": "Tag with name 'news' already exists"}}
"""

from typing import Any, Optional


class SyndicationException(Exception):
    """
    Base exception for all storage-layer errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with error details for JSON response
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(SyndicationException):
    """
    Resource not found error (404 Not Found).

    Raised both for missing records and for records owned by a different
    user, so callers cannot probe for other users' identifiers.

    Example:
        raise NotFoundError("Feed", feed_id)
        # Message: "Feed with id 'abc-123' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


class UserNotFoundError(NotFoundError):
    """User not found error."""

    def __init__(self, user_id: str) -> None:
        super().__init__(resource="User", resource_id=user_id)


class CategoryNotFoundError(NotFoundError):
    """Category not found error."""

    def __init__(self, category_id: str) -> None:
        super().__init__(resource="Category", resource_id=category_id)


class FeedNotFoundError(NotFoundError):
    """Feed not found error."""

    def __init__(self, feed_id: str) -> None:
        super().__init__(resource="Feed", resource_id=feed_id)


class EntryNotFoundError(NotFoundError):
    """Entry not found error."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(resource="Entry", resource_id=entry_id)


class TagNotFoundError(NotFoundError):
    """Tag not found error."""

    def __init__(self, tag_id: str) -> None:
        super().__init__(resource="Tag", resource_id=tag_id)


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION & CONFLICT ERRORS (400, 409)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(SyndicationException):
    """Validation error (400 Bad Request)."""

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class ConflictError(SyndicationException):
    """
    Resource conflict error (409 Conflict).

    Raised when a write would violate a per-user uniqueness constraint.
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )


class UserConflictError(ConflictError):
    """Username already taken."""

    def __init__(self, username: str) -> None:
        super().__init__(
            message=f"User with name '{username}' already exists",
            details={"field": "username"},
        )


class CategoryConflictError(ConflictError):
    """Category name already used by this user."""

    def __init__(self, name: str) -> None:
        super().__init__(
            message=f"Category with name '{name}' already exists",
            details={"field": "name"},
        )


class TagConflictError(ConflictError):
    """Tag name already used by this user."""

    def __init__(self, name: str) -> None:
        super().__init__(
            message=f"Tag with name '{name}' already exists",
            details={"field": "name"},
        )


# ═══════════════════════════════════════════════════════════════════════════════
# STORAGE ERRORS (500)
# ═══════════════════════════════════════════════════════════════════════════════


class StorageError(SyndicationException):
    """
    Underlying persistence failure.

    Wraps driver and engine errors (lost connections, internal constraint
    failures). The original exception is chained as __cause__ but its
    text is kept out of the response payload.
    """

    def __init__(
        self,
        message: str = "Storage operation failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_code="STORAGE_ERROR",
            details=details,
        )
