"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from wishyork.domain.model import (
    AuthorSnapshot,
    Comment,
    CommentReport,
    Content,
    Reply,
    TopLevel,
    UserProfile,
)
from wishyork.domain.value import (
    CommentId,
    ContentId,
    ContentRef,
    ContentType,
    ReportId,
    ReportStatus,
    UserId,
    Username,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_content_ref(row: Dict[str, Any], prefix: str = "content_") -> ContentRef:
    """Build a ContentRef from the ``<prefix>type`` and ``<prefix>id`` columns."""
    return ContentRef(
        type=ContentType(row[f"{prefix}type"]),
        id=ContentId(_uuid(row[f"{prefix}id"])),
    )


def row_to_user(row: Dict[str, Any]) -> UserProfile:
    """Convert database row to UserProfile domain model.

    Args:
        row: Database row as dict

    Returns:
        UserProfile domain model
    """
    return UserProfile(
        id=UserId(_uuid(row["id"])),
        name=row["name"],
        username=Username(row["username"]),
        avatar_url=row.get("avatar_url"),
        created_at=row["created_at"],
    )


def user_to_dict(user: UserProfile) -> Dict[str, Any]:
    """Convert UserProfile domain model to database dict."""
    return user.model_dump()


def row_to_content(row: Dict[str, Any]) -> Content:
    """Convert database row to Content domain model.

    Args:
        row: Database row as dict

    Returns:
        Content domain model
    """
    return Content(
        ref=row_to_content_ref(row, prefix=""),
        author_id=UserId(_uuid(row["author_id"])),
        title=row["title"],
        comment_count=row["comment_count"],
        created_at=row["created_at"],
    )


def content_to_dict(content: Content) -> Dict[str, Any]:
    """Convert Content domain model to database dict."""
    return {
        "type": content.ref.type.value,
        "id": content.ref.id,
        "author_id": content.author_id,
        "title": content.title,
        "comment_count": content.comment_count,
        "created_at": content.created_at,
    }


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    placement: TopLevel | Reply
    if row["kind"] == "reply":
        placement = Reply(
            parent_id=CommentId(_uuid(row["parent_id"])),
            parent_author_username=Username(row["parent_author_username"])
            if row.get("parent_author_username")
            else None,
        )
    else:
        placement = TopLevel(reply_count=row["reply_count"])

    return Comment(
        id=CommentId(_uuid(row["id"])),
        content=row_to_content_ref(row),
        author=AuthorSnapshot(
            author_id=UserId(_uuid(row["author_id"])),
            name=row["author_name"],
            username=Username(row["author_username"]),
            avatar_url=row.get("author_avatar_url"),
        ),
        text=row["text"],
        placement=placement,
        created_at=row["created_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    created_at is left out; the database assigns it on insert.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion
    """
    parent_username = (
        comment.placement.parent_author_username
        if isinstance(comment.placement, Reply)
        else None
    )
    return {
        "id": comment.id,
        "content_type": comment.content.type.value,
        "content_id": comment.content.id,
        "author_id": comment.author.author_id,
        "author_name": comment.author.name,
        "author_username": comment.author.username.root,
        "author_avatar_url": comment.author.avatar_url,
        "text": comment.text,
        "kind": comment.placement.kind,
        "parent_id": comment.parent_id,
        "parent_author_username": parent_username.root if parent_username else None,
        "reply_count": comment.reply_count,
    }


def row_to_report(row: Dict[str, Any]) -> CommentReport:
    """Convert database row to CommentReport domain model."""
    return CommentReport(
        id=ReportId(_uuid(row["id"])),
        comment_id=CommentId(_uuid(row["comment_id"])),
        content=row_to_content_ref(row),
        reported_by=UserId(_uuid(row["reported_by"])),
        reason=row["reason"],
        status=ReportStatus(row["status"]),
        reported_at=row["reported_at"],
    )


def report_to_dict(report: CommentReport) -> Dict[str, Any]:
    """Convert CommentReport domain model to database dict."""
    return {
        "id": report.id,
        "comment_id": report.comment_id,
        "content_type": report.content.type.value,
        "content_id": report.content.id,
        "reported_by": report.reported_by,
        "reason": report.reason,
        "status": report.status.value,
        "reported_at": report.reported_at,
    }
