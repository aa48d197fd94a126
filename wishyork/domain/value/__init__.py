"""Domain value objects for WishYork."""

from wishyork.domain.value.identifiers import (
    CommentId,
    ContentId,
    ReportId,
    UserId,
)
from wishyork.domain.value.types import (
    ChangeType,
    ContentRef,
    ContentType,
    ReportStatus,
    Username,
    normalize_comment_text,
)

__all__ = [
    # Identifiers
    "UserId",
    "ContentId",
    "CommentId",
    "ReportId",
    # Types
    "ChangeType",
    "ContentRef",
    "ContentType",
    "ReportStatus",
    "Username",
    "normalize_comment_text",
]
