"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .comment_tree import CommentThread, CommentThreadView, build_comment_tree
from .jwt_service import JWTService
from .report_service import ReportService
from .user_service import UserService

__all__ = [
    "CommentService",
    "CommentThread",
    "CommentThreadView",
    "JWTService",
    "ReportService",
    "Service",
    "UserService",
    "build_comment_tree",
]
