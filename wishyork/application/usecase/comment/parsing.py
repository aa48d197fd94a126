"""Parsing of path and body identifiers into typed domain ids."""

from uuid import UUID

from wishyork.domain.value import CommentId, ContentId, ContentRef, ContentType, UserId


def parse_content_ref(content_type: ContentType | str, content_id: str) -> ContentRef:
    """Build a ContentRef from request strings.

    Raises:
        ValueError: If the type is unknown or the id is not a UUID
    """
    return ContentRef(type=ContentType(content_type), id=ContentId(UUID(content_id)))


def parse_comment_id(comment_id: str) -> CommentId:
    """Raises ValueError if the id is not a UUID."""
    return CommentId(UUID(comment_id))


def parse_user_id(user_id: str) -> UserId:
    return UserId(UUID(user_id))
