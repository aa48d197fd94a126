"""Comment use cases."""

from .add_comment import AddCommentRequest, AddCommentResponse, AddCommentUseCase
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .get_comment_thread import (
    CommentItem,
    GetCommentThreadRequest,
    GetCommentThreadResponse,
    GetCommentThreadUseCase,
    ThreadItem,
)
from .report_comment import (
    ReportCommentRequest,
    ReportCommentResponse,
    ReportCommentUseCase,
)
from .stream_comments import (
    CommentStream,
    OpenCommentStreamRequest,
    OpenCommentStreamUseCase,
)

__all__ = [
    "AddCommentRequest",
    "AddCommentResponse",
    "AddCommentUseCase",
    "CommentItem",
    "CommentStream",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetCommentThreadRequest",
    "GetCommentThreadResponse",
    "GetCommentThreadUseCase",
    "OpenCommentStreamRequest",
    "OpenCommentStreamUseCase",
    "ReportCommentRequest",
    "ReportCommentResponse",
    "ReportCommentUseCase",
    "ThreadItem",
]
