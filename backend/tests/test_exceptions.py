"""Tests for mapping failed outcomes onto HTTP errors."""

import pytest

from erpdash.middleware.exceptions import (
    ERPException,
    NotAuthenticatedError,
    ResourceNotFoundError,
    StoreFailureError,
    ValidationFailureError,
    error_body,
)
from erpdash.schemas.common import ErrorCode, Outcome


@pytest.mark.unit
class TestFromOutcome:
    @pytest.mark.parametrize(
        "code, exc_type, status_code",
        [
            (ErrorCode.NOT_AUTHENTICATED, NotAuthenticatedError, 401),
            (ErrorCode.NOT_FOUND, ResourceNotFoundError, 404),
            (ErrorCode.VALIDATION_FAILURE, ValidationFailureError, 422),
            (ErrorCode.STORE_FAILURE, StoreFailureError, 502),
        ],
    )
    def test_maps_each_code(self, code, exc_type, status_code):
        exc = ERPException.from_outcome(Outcome.failure(code, "nope"))

        assert type(exc) is exc_type
        assert exc.status_code == status_code
        assert exc.error_code == code.value
        assert exc.message == "nope"

    def test_missing_message_gets_a_default(self):
        exc = ERPException.from_outcome(Outcome(ok=False, error=ErrorCode.NOT_FOUND))

        assert exc.message == "Operation failed"

    def test_error_body_omits_empty_details(self):
        assert error_body("NOT_FOUND", "gone") == {"error": {"code": "NOT_FOUND", "message": "gone"}}
        assert error_body("X", "y", {"a": 1})["error"]["details"] == {"a": 1}
