"""Repository interfaces for the WishYork comment subsystem.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from wishyork.domain.repository.comment import CommentRepository, WriteBatch
from wishyork.domain.repository.content import ContentRepository
from wishyork.domain.repository.feed import CommentFeed, CommentSubscription
from wishyork.domain.repository.report import ReportRepository
from wishyork.domain.repository.user import UserRepository

__all__ = [
    "CommentFeed",
    "CommentRepository",
    "CommentSubscription",
    "ContentRepository",
    "ReportRepository",
    "UserRepository",
    "WriteBatch",
]
