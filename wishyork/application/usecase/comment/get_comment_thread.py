"""Get comment thread use case."""

from datetime import datetime

from pydantic import BaseModel

from wishyork.domain.model import Comment, Reply
from wishyork.domain.service import CommentService, CommentThread
from wishyork.domain.value import ContentRef, ContentType

from .parsing import parse_content_ref


class CommentItem(BaseModel):
    """Comment or reply in a response."""

    comment_id: str
    author_id: str
    author_name: str
    author_username: str
    author_avatar_url: str | None
    text: str
    parent_id: str | None
    parent_author_username: str | None
    reply_count: int
    created_at: datetime | None

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentItem":
        parent_username = (
            comment.placement.parent_author_username
            if isinstance(comment.placement, Reply)
            else None
        )
        return cls(
            comment_id=str(comment.id),
            author_id=str(comment.author.author_id),
            author_name=comment.author.name,
            author_username=str(comment.author.username),
            author_avatar_url=comment.author.avatar_url,
            text=comment.text,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            parent_author_username=str(parent_username) if parent_username else None,
            reply_count=comment.reply_count,
            created_at=comment.created_at,
        )


class ThreadItem(BaseModel):
    """Top-level comment with its replies, oldest first."""

    comment: CommentItem
    replies: list[CommentItem]


class GetCommentThreadRequest(BaseModel):
    """Get comment thread request."""

    content_type: ContentType
    content_id: str  # UUID string


class GetCommentThreadResponse(BaseModel):
    """Get comment thread response."""

    content_type: ContentType
    content_id: str
    threads: list[ThreadItem]
    total: int  # Comments and replies shown in the tree

    @classmethod
    def from_threads(
        cls, content: ContentRef, threads: list[CommentThread]
    ) -> "GetCommentThreadResponse":
        items = [
            ThreadItem(
                comment=CommentItem.from_comment(thread.comment),
                replies=[CommentItem.from_comment(r) for r in thread.replies],
            )
            for thread in threads
        ]
        return cls(
            content_type=content.type,
            content_id=str(content.id),
            threads=items,
            total=sum(1 + len(item.replies) for item in items),
        )


class GetCommentThreadUseCase:
    """Use case for reading a post's or wishlist's comment tree."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(
        self, request: GetCommentThreadRequest
    ) -> GetCommentThreadResponse:
        """Execute get thread flow.

        Raises:
            ValueError: If content_id is not a UUID
            NotFoundError: If the content item does not exist
        """
        content = parse_content_ref(request.content_type, request.content_id)
        threads = await self.comment_service.get_thread(content)
        return GetCommentThreadResponse.from_threads(content, threads)
