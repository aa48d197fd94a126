"""Open comment stream use case."""

from dataclasses import dataclass

from pydantic import BaseModel

from wishyork.domain.model import CommentChange
from wishyork.domain.repository import CommentSubscription
from wishyork.domain.service import CommentService, CommentThreadView
from wishyork.domain.value import ContentType

from .get_comment_thread import GetCommentThreadResponse
from .parsing import parse_content_ref


class OpenCommentStreamRequest(BaseModel):
    """Open comment stream request."""

    content_type: ContentType
    content_id: str  # UUID string


@dataclass
class CommentStream:
    """Live comment thread: a subscription plus the view it keeps current."""

    subscription: CommentSubscription
    view: CommentThreadView

    def snapshot(self) -> GetCommentThreadResponse:
        """Rebuild the full tree from the current local list."""
        return GetCommentThreadResponse.from_threads(
            self.view.content, self.view.tree()
        )

    def apply(self, changes: list[CommentChange]) -> GetCommentThreadResponse:
        """Apply one committed batch and rebuild the tree once."""
        self.view.apply_all(changes)
        return self.snapshot()

    async def close(self) -> None:
        await self.subscription.close()


class OpenCommentStreamUseCase:
    """Use case for subscribing to a comment thread."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: OpenCommentStreamRequest) -> CommentStream:
        """Subscribe and take the initial snapshot.

        The caller owns the returned stream and must close it.

        Raises:
            ValueError: If content_id is not a UUID
            NotFoundError: If the content item does not exist
        """
        content = parse_content_ref(request.content_type, request.content_id)
        subscription, view = await self.comment_service.open_thread_stream(content)
        return CommentStream(subscription=subscription, view=view)
