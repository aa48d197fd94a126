"""In-memory document store shared by the in-memory repositories."""

import asyncio
from datetime import datetime, timedelta

from wishyork.domain.model import Comment, CommentReport, Content, UserProfile
from wishyork.domain.value import CommentId, ContentRef, ReportId, UserId


class InMemoryDocumentStore:
    """Collections of documents held in process memory.

    Write batches stage their changes against copies of the collections
    and swap them in only when every write succeeds, so readers never see
    a half-applied batch.
    """

    def __init__(self) -> None:
        self.comments: dict[CommentId, Comment] = {}
        self.contents: dict[ContentRef, Content] = {}
        self.users: dict[UserId, UserProfile] = {}
        self.reports: dict[ReportId, CommentReport] = {}
        self.lock = asyncio.Lock()
        self._last_timestamp: datetime | None = None
        self._pending_failure: Exception | None = None

    def server_timestamp(self) -> datetime:
        """Return a commit timestamp strictly greater than the previous one."""
        now = datetime.now()
        if self._last_timestamp is not None and now <= self._last_timestamp:
            now = self._last_timestamp + timedelta(microseconds=1)
        self._last_timestamp = now
        return now

    def fail_next_commit(self, error: Exception | None = None) -> None:
        """Make the next batch commit fail before anything is applied.

        Args:
            error: Cause to report (defaults to a connection error)
        """
        self._pending_failure = error or ConnectionError("Simulated store failure")

    def take_pending_failure(self) -> Exception | None:
        failure, self._pending_failure = self._pending_failure, None
        return failure
