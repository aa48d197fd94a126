"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from wishyork.domain.model.change import CommentChange
from wishyork.domain.model.comment import Comment
from wishyork.domain.value import CommentId, ContentRef


class WriteBatch(ABC):
    """Atomic set of writes against the document store.

    Staged writes are applied together by ``commit`` or not at all.
    Counter writes are relative increments evaluated inside the store,
    so concurrent batches from different writers compose without lost
    updates.
    """

    @abstractmethod
    def create_comment(self, comment: Comment) -> None:
        """Stage creation of a comment.

        The store assigns ``created_at`` at commit time.

        Args:
            comment: The comment to create
        """
        pass

    @abstractmethod
    def delete_comment(self, comment: Comment) -> None:
        """Stage deletion of a comment.

        Args:
            comment: The comment to delete
        """
        pass

    @abstractmethod
    def increment_reply_count(
        self, content: ContentRef, comment_id: CommentId, delta: int
    ) -> None:
        """Stage a relative change to a top-level comment's reply_count.

        Args:
            content: Content the comment belongs to
            comment_id: The top-level comment
            delta: Amount to add (negative to decrement)
        """
        pass

    @abstractmethod
    def increment_comment_count(self, content: ContentRef, delta: int) -> None:
        """Stage a relative change to a content item's comment_count.

        Args:
            content: The post or wishlist
            delta: Amount to add (negative to decrement)
        """
        pass

    @abstractmethod
    async def commit(self) -> List[CommentChange]:
        """Apply every staged write, or none of them.

        Returns:
            Committed comment changes in application order

        Raises:
            DocumentNotFoundError: If an increment targets a missing document
            BatchCommitError: If the store rejects the batch
        """
        pass


class CommentRepository(ABC):
    """Repository for Comment entity.

    Comments are addressed under their parent content item.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(
        self, content: ContentRef, comment_id: CommentId
    ) -> Optional[Comment]:
        """Find a comment by ID within a content item.

        Args:
            content: Parent content item
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_content(self, content: ContentRef) -> List[Comment]:
        """Find all comments and replies for a content item.

        Args:
            content: Parent content item

        Returns:
            Flat list ordered by created_at ascending (oldest first)
        """
        pass

    @abstractmethod
    async def find_replies(
        self, content: ContentRef, parent_id: CommentId
    ) -> List[Comment]:
        """Find direct replies to a comment.

        Args:
            content: Parent content item
            parent_id: The top-level comment ID

        Returns:
            Replies ordered by created_at ascending
        """
        pass

    @abstractmethod
    def batch(self) -> WriteBatch:
        """Start a new atomic write batch.

        Returns:
            Empty write batch bound to this store
        """
        pass
