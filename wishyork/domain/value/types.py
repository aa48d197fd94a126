"""Domain value objects for WishYork.

Value objects are immutable and defined by their values, not identity.
They carry the validation rules for the comment subsystem.
"""

import re
from enum import Enum

from pydantic import field_validator

from wishyork.domain.value.common import RootValueObject, ValueObject
from wishyork.domain.value.identifiers import ContentId


class ContentType(str, Enum):
    """Kind of parent content item that owns a comment thread."""

    POST = "post"
    WISHLIST = "wishlist"


class ChangeType(str, Enum):
    """Kind of change pushed to comment subscribers."""

    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"


class ReportStatus(str, Enum):
    """Moderation status of a comment report."""

    NEW = "new"
    REVIEWED = "reviewed"


class ContentRef(ValueObject):
    """Address of a post or wishlist.

    Comments live under their parent content item, so every comment
    lookup is scoped by one of these.
    """

    type: ContentType
    id: ContentId

    def __str__(self) -> str:
        return f"{self.type.value}/{self.id}"


class Username(RootValueObject[str]):
    """Public username shown as @username.

    1-50 characters, no whitespace. Examples: 'alice', 'wish_maker-42'
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        if not re.fullmatch(r"\S{1,50}", v):
            raise ValueError("Username must be 1-50 characters without whitespace")
        return v


def normalize_comment_text(text: str, max_length: int) -> str:
    """Validate comment text and return it unchanged.

    The body is stored as typed; trimming is only used to reject
    whitespace-only input.

    Raises:
        ValueError: If text is blank or longer than max_length
    """
    if not text or not text.strip():
        raise ValueError("Comment text cannot be empty")
    if len(text) > max_length:
        raise ValueError(f"Comment text must be at most {max_length} characters")
    return text
