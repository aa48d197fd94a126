"""Delete comment use case."""

from pydantic import BaseModel

from wishyork.application.usecase.base import BaseUseCase
from wishyork.domain.service import CommentService
from wishyork.domain.value import ContentType

from .parsing import parse_comment_id, parse_content_ref, parse_user_id


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    content_type: ContentType
    content_id: str  # UUID string
    comment_id: str  # UUID string
    actor_id: str  # User ID from authenticated user


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    removed: int  # The comment plus any replies deleted with it


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting a comment together with its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            ValueError: If an id is malformed
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the actor is not the author
            BatchCommitError: If the write failed
        """
        content = parse_content_ref(request.content_type, request.content_id)
        comment_id = parse_comment_id(request.comment_id)

        removed = await self.comment_service.delete_comment(
            content=content,
            comment_id=comment_id,
            actor_id=parse_user_id(request.actor_id),
        )

        return DeleteCommentResponse(comment_id=str(comment_id), removed=removed)
