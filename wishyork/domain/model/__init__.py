"""Domain model entities for WishYork."""

from wishyork.domain.model.change import CommentChange, merge_change
from wishyork.domain.model.comment import (
    AuthorSnapshot,
    Comment,
    Placement,
    Reply,
    TopLevel,
)
from wishyork.domain.model.content import Content
from wishyork.domain.model.report import DEFAULT_REPORT_REASON, CommentReport
from wishyork.domain.model.user import UserProfile

__all__ = [
    "AuthorSnapshot",
    "Comment",
    "CommentChange",
    "CommentReport",
    "merge_change",
    "Content",
    "DEFAULT_REPORT_REASON",
    "Placement",
    "Reply",
    "TopLevel",
    "UserProfile",
]
