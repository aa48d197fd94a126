"""In-memory comment repository for testing."""

from typing import Optional

from wishyork.domain.model.comment import Comment
from wishyork.domain.repository.comment import CommentRepository, WriteBatch
from wishyork.domain.value import CommentId, ContentRef

from .batch import InMemoryWriteBatch
from .store import InMemoryDocumentStore


def _created_key(comment: Comment):
    return (comment.created_at is None, comment.created_at)


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, store: InMemoryDocumentStore | None = None) -> None:
        self.store = store or InMemoryDocumentStore()

    async def find_by_id(
        self, content: ContentRef, comment_id: CommentId
    ) -> Optional[Comment]:
        """Find a comment by ID within a content item."""
        comment = self.store.comments.get(comment_id)
        if comment and comment.content == content:
            return comment
        return None

    async def find_by_content(self, content: ContentRef) -> list[Comment]:
        """Find all comments for a content item, oldest first."""
        comments = [c for c in self.store.comments.values() if c.content == content]
        comments.sort(key=_created_key)
        return comments

    async def find_replies(
        self, content: ContentRef, parent_id: CommentId
    ) -> list[Comment]:
        """Find direct replies to a comment, oldest first."""
        replies = [
            c
            for c in self.store.comments.values()
            if c.content == content and c.parent_id == parent_id
        ]
        replies.sort(key=_created_key)
        return replies

    def batch(self) -> WriteBatch:
        """Start a write batch against the shared store."""
        return InMemoryWriteBatch(self.store)
