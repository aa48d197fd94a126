"""Add comment use case."""

from pydantic import BaseModel

from wishyork.domain.service import CommentService, UserService
from wishyork.domain.value import ContentType
from wishyork.util.jwt import TokenPayload

from .get_comment_thread import CommentItem
from .parsing import parse_comment_id, parse_content_ref


class AddCommentRequest(BaseModel):
    """Add comment request."""

    content_type: ContentType
    content_id: str  # UUID string
    text: str
    identity: TokenPayload  # Signed-in user from the session token
    parent_id: str | None = None  # Top-level comment ID when replying


class AddCommentResponse(BaseModel):
    """Add comment response."""

    content_type: ContentType
    content_id: str
    comment: CommentItem


class AddCommentUseCase:
    """Use case for commenting on a post or wishlist, or replying to a comment."""

    def __init__(
        self,
        comment_service: CommentService,
        user_service: UserService,
    ) -> None:
        """Initialize add comment use case.

        Args:
            comment_service: Comment domain service
            user_service: User service for the author snapshot
        """
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: AddCommentRequest) -> AddCommentResponse:
        """Execute add comment flow.

        Steps:
        1. Parse ids from the request
        2. Snapshot the author from their profile and session
        3. Add the comment via comment service (one atomic batch)

        Args:
            request: Add comment request

        Returns:
            Created comment

        Raises:
            ValueError: If an id is malformed
            ValidationError: If the text is blank or too long
            NotFoundError: If content or parent comment not found
            BusinessRuleViolationError: If replying to a reply
            BatchCommitError: If the write failed
        """
        content = parse_content_ref(request.content_type, request.content_id)
        parent_id = parse_comment_id(request.parent_id) if request.parent_id else None

        author = await self.user_service.get_author_snapshot(request.identity)

        comment = await self.comment_service.add_comment(
            content=content,
            author=author,
            text=request.text,
            parent_id=parent_id,
        )

        return AddCommentResponse(
            content_type=content.type,
            content_id=str(content.id),
            comment=CommentItem.from_comment(comment),
        )
