"""PostgreSQL repository implementations."""

from wishyork.persistence.repository.comment import (
    PostgresCommentRepository,
    PostgresWriteBatch,
)
from wishyork.persistence.repository.content import PostgresContentRepository
from wishyork.persistence.repository.report import PostgresReportRepository
from wishyork.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresContentRepository",
    "PostgresReportRepository",
    "PostgresUserRepository",
    "PostgresWriteBatch",
]
