"""In-memory repository implementations for testing and local runs."""

from .batch import InMemoryWriteBatch
from .comment import InMemoryCommentRepository
from .content import InMemoryContentRepository
from .report import InMemoryReportRepository
from .store import InMemoryDocumentStore
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryContentRepository",
    "InMemoryDocumentStore",
    "InMemoryReportRepository",
    "InMemoryUserRepository",
    "InMemoryWriteBatch",
]
