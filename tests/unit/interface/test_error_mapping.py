"""Unit tests for domain error to HTTP status mapping."""

import pytest

from wishyork.domain.error import (
    BatchCommitError,
    BusinessRuleViolationError,
    DocumentNotFoundError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from wishyork.interface.error import to_http_exception


class TestToHttpException:
    @pytest.mark.parametrize(
        ("error", "status_code"),
        [
            (NotAuthorizedError("comment", "c1", "u1"), 403),
            (NotFoundError("Comment", "c1"), 404),
            (BusinessRuleViolationError("too deep"), 409),
            (BatchCommitError("deadline exceeded"), 503),
            (DocumentNotFoundError("comments", "c1"), 503),
            (ValidationError("blank"), 400),
            (ValueError("badly formed hexadecimal UUID string"), 400),
            (RuntimeError("boom"), 500),
        ],
    )
    def test_status_codes(self, error, status_code):
        assert to_http_exception(error, "add comment").status_code == status_code

    def test_commit_failure_detail_is_generic(self):
        # Act
        exc = to_http_exception(BatchCommitError("connection reset"), "add comment")

        # Assert
        assert exc.detail == "Could not add comment, please try again"
