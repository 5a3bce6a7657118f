"""
Tests for the exception hierarchy rendered by the HTTP layer.
"""

from syndication.core.exceptions import (
    ConflictError,
    FeedNotFoundError,
    NotFoundError,
    StorageError,
    SyndicationException,
    TagConflictError,
)


class TestExceptions:
    def test_not_found(self):
        error = FeedNotFoundError("abc")

        assert isinstance(error, NotFoundError)
        assert error.status_code == 404
        assert error.error_code == "NOT_FOUND"
        assert "abc" in error.message

    def test_conflict(self):
        error = TagConflictError("later")

        assert isinstance(error, ConflictError)
        assert error.status_code == 409
        assert error.message == "Tag with name 'later' already exists"

    def test_storage_error_defaults(self):
        error = StorageError()

        assert isinstance(error, SyndicationException)
        assert error.status_code == 500
        assert error.to_dict() == {
            "error": {
                "code": "STORAGE_ERROR",
                "message": "Storage operation failed",
                "details": {},
            }
        }

    def test_base_defaults_to_internal_error(self):
        assert SyndicationException("boom").error_code == "INTERNAL_ERROR"
