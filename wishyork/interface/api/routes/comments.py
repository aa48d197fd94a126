"""Comment routes.

Threads live under their parent content item:
``/posts/{id}/comments`` and ``/wishlists/{id}/comments``.
"""

from collections.abc import AsyncIterator
from enum import Enum

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Request, status
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from wishyork.application.usecase.comment import (
    AddCommentRequest,
    AddCommentResponse,
    AddCommentUseCase,
    CommentStream,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentThreadRequest,
    GetCommentThreadResponse,
    GetCommentThreadUseCase,
    OpenCommentStreamRequest,
    OpenCommentStreamUseCase,
    ReportCommentRequest,
    ReportCommentResponse,
    ReportCommentUseCase,
)
from wishyork.config import CommentSettings
from wishyork.domain.service import JWTService
from wishyork.domain.value import ContentType
from wishyork.interface.error import HANDLED_ERRORS, to_http_exception
from wishyork.util.jwt import TokenPayload

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class ContentCollection(str, Enum):
    """URL collection segment for each commentable content type."""

    POSTS = "posts"
    WISHLISTS = "wishlists"

    @property
    def content_type(self) -> ContentType:
        return ContentType(self.value[:-1])


def _require_identity(
    jwt_service: JWTService, auth_token: str | None, action: str
) -> TokenPayload:
    identity = jwt_service.get_identity_from_token(auth_token)
    if not identity:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return identity


class AddCommentAPIRequest(BaseModel):
    """API request for adding a comment or reply."""

    text: str = Field(min_length=1)  # Length limit is a configured setting
    parent_id: str | None = None  # Top-level comment ID when replying


@router.get(
    "/{collection}/{content_id}/comments", response_model=GetCommentThreadResponse
)
async def get_comments(
    collection: ContentCollection,
    content_id: str,
    get_thread_use_case: FromDishka[GetCommentThreadUseCase],
) -> GetCommentThreadResponse:
    """Get the comment tree of a post or wishlist.

    Top-level comments oldest first, each with its replies oldest first.
    """
    try:
        return await get_thread_use_case.execute(
            GetCommentThreadRequest(
                content_type=collection.content_type, content_id=content_id
            )
        )
    except HANDLED_ERRORS as e:
        raise to_http_exception(e, "load comments") from e


@router.post(
    "/{collection}/{content_id}/comments",
    response_model=AddCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    collection: ContentCollection,
    content_id: str,
    request: AddCommentAPIRequest,
    add_comment_use_case: FromDishka[AddCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AddCommentResponse:
    """Comment on a post or wishlist, or reply to a top-level comment.

    Requires authentication.

    Args:
        collection: posts or wishlists
        content_id: Content UUID
        request: Comment text and optional parent comment
        add_comment_use_case: Add comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created comment

    Raises:
        HTTPException: If not authenticated, the target is missing,
            the reply nests too deep or the write failed
    """
    identity = _require_identity(jwt_service, auth_token, "comment")

    try:
        return await add_comment_use_case.execute(
            AddCommentRequest(
                content_type=collection.content_type,
                content_id=content_id,
                text=request.text,
                identity=identity,
                parent_id=request.parent_id,
            )
        )
    except HANDLED_ERRORS as e:
        raise to_http_exception(e, "add comment") from e


@router.delete(
    "/{collection}/{content_id}/comments/{comment_id}",
    response_model=DeleteCommentResponse,
)
async def delete_comment(
    collection: ContentCollection,
    content_id: str,
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Delete a comment; a top-level comment takes its replies with it.

    Only the comment author can delete.
    """
    identity = _require_identity(jwt_service, auth_token, "delete comments")

    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(
                content_type=collection.content_type,
                content_id=content_id,
                comment_id=comment_id,
                actor_id=identity.user_id,
            )
        )
    except HANDLED_ERRORS as e:
        raise to_http_exception(e, "delete this comment") from e


class ReportCommentAPIRequest(BaseModel):
    """API request for reporting a comment."""

    reason: str | None = Field(default=None, max_length=500)


@router.post(
    "/{collection}/{content_id}/comments/{comment_id}/reports",
    response_model=ReportCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report_comment(
    collection: ContentCollection,
    content_id: str,
    comment_id: str,
    report_comment_use_case: FromDishka[ReportCommentUseCase],
    jwt_service: FromDishka[JWTService],
    request: ReportCommentAPIRequest | None = None,
    auth_token: str | None = Cookie(default=None),
) -> ReportCommentResponse:
    """Report a comment to moderators. Requires authentication."""
    identity = _require_identity(jwt_service, auth_token, "report comments")

    try:
        return await report_comment_use_case.execute(
            ReportCommentRequest(
                content_type=collection.content_type,
                content_id=content_id,
                comment_id=comment_id,
                reporter_id=identity.user_id,
                reason=request.reason if request else None,
            )
        )
    except HANDLED_ERRORS as e:
        raise to_http_exception(e, "report comment") from e


def format_sse(event: str, data: str) -> str:
    """Format one Server-Sent Events message."""
    return f"event: {event}\ndata: {data}\n\n"


SSE_KEEPALIVE = ": keepalive\n\n"


async def thread_event_stream(
    request: Request, stream: CommentStream, keepalive_seconds: float
) -> AsyncIterator[str]:
    """Yield the thread tree once, then again after every committed batch.

    Idle periods get keepalive comments. If the subscriber fell behind,
    a ``resync`` event tells the client to reconnect for a fresh
    snapshot. The subscription is closed when the client goes away.
    """
    try:
        yield format_sse("thread", stream.snapshot().model_dump_json())
        while not await request.is_disconnected():
            batch = await stream.subscription.get(timeout=keepalive_seconds)
            if batch is not None:
                yield format_sse("thread", stream.apply(batch).model_dump_json())
            elif stream.subscription.closed:
                if stream.subscription.lagged:
                    yield format_sse("resync", '{"reason":"lagged"}')
                break
            else:
                yield SSE_KEEPALIVE
    finally:
        await stream.close()
        logfire.info("Comment stream ended", content=str(stream.view.content))


@router.get("/{collection}/{content_id}/comments/stream")
async def stream_comments(
    collection: ContentCollection,
    content_id: str,
    http_request: Request,
    open_stream_use_case: FromDishka[OpenCommentStreamUseCase],
    comment_settings: FromDishka[CommentSettings],
) -> StreamingResponse:
    """Stream the comment tree as Server-Sent Events.

    Sends a ``thread`` event with the full tree on connect and after
    every committed batch.
    """
    try:
        stream = await open_stream_use_case.execute(
            OpenCommentStreamRequest(
                content_type=collection.content_type, content_id=content_id
            )
        )
    except HANDLED_ERRORS as e:
        raise to_http_exception(e, "open comment stream") from e

    return StreamingResponse(
        thread_event_stream(
            http_request, stream, comment_settings.stream_keepalive_seconds
        ),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
