"""In-memory write batch."""

from typing import Callable

from pydantic import ValidationError as PydanticValidationError

from wishyork.domain.error import (
    BatchCommitError,
    BusinessRuleViolationError,
    DocumentNotFoundError,
)
from wishyork.domain.model import Comment, CommentChange, Content, merge_change
from wishyork.domain.repository.comment import WriteBatch
from wishyork.domain.value import ChangeType, CommentId, ContentRef

from .store import InMemoryDocumentStore


class _Staged:
    """Copies of the collections a batch writes to."""

    def __init__(self, store: InMemoryDocumentStore) -> None:
        self.store = store
        self.comments = dict(store.comments)
        self.contents = dict(store.contents)
        self.changes: dict[CommentId, CommentChange] = {}

    def record(self, change_type: ChangeType, comment: Comment) -> None:
        merge_change(self.changes, CommentChange(type=change_type, comment=comment))


Operation = Callable[[_Staged], None]


class InMemoryWriteBatch(WriteBatch):
    """Write batch applied atomically to an InMemoryDocumentStore."""

    def __init__(self, store: InMemoryDocumentStore) -> None:
        self._store = store
        self._operations: list[Operation] = []
        self._committed = False

    def _stage(self, operation: Operation) -> None:
        if self._committed:
            raise BatchCommitError("Write batch already committed")
        self._operations.append(operation)

    def create_comment(self, comment: Comment) -> None:
        def apply(staged: _Staged) -> None:
            created = comment.model_copy(
                update={"created_at": staged.store.server_timestamp()}
            )
            staged.comments[created.id] = created
            staged.record(ChangeType.ADDED, created)

        self._stage(apply)

    def delete_comment(self, comment: Comment) -> None:
        def apply(staged: _Staged) -> None:
            existing = staged.comments.get(comment.id)
            if existing is None or existing.content != comment.content:
                # Deleting a missing document is a no-op
                return
            del staged.comments[comment.id]
            staged.record(ChangeType.REMOVED, existing)

        self._stage(apply)

    def increment_reply_count(
        self, content: ContentRef, comment_id: CommentId, delta: int
    ) -> None:
        def apply(staged: _Staged) -> None:
            existing = staged.comments.get(comment_id)
            if existing is None or existing.content != content:
                raise DocumentNotFoundError(f"{content}/comments", str(comment_id))
            updated = existing.with_reply_count(existing.reply_count + delta)
            staged.comments[comment_id] = updated
            staged.record(ChangeType.MODIFIED, updated)

        self._stage(apply)

    def increment_comment_count(self, content: ContentRef, delta: int) -> None:
        def apply(staged: _Staged) -> None:
            existing = staged.contents.get(content)
            if existing is None:
                raise DocumentNotFoundError(f"{content.type.value}s", str(content.id))
            staged.contents[content] = Content.model_validate(
                {
                    **existing.model_dump(),
                    "comment_count": existing.comment_count + delta,
                }
            )

        self._stage(apply)

    async def commit(self) -> list[CommentChange]:
        """Apply all staged writes, or none of them."""
        if self._committed:
            raise BatchCommitError("Write batch already committed")
        self._committed = True

        async with self._store.lock:
            failure = self._store.take_pending_failure()
            if failure is not None:
                raise BatchCommitError(f"Batch commit failed: {failure}") from failure

            staged = _Staged(self._store)
            try:
                for operation in self._operations:
                    operation(staged)
            except DocumentNotFoundError:
                raise
            except (BusinessRuleViolationError, PydanticValidationError) as e:
                raise BatchCommitError(f"Batch rejected: {e}") from e

            self._store.comments = staged.comments
            self._store.contents = staged.contents
            return list(staged.changes.values())
