"""PostgreSQL implementation of Comment repository."""

from typing import Awaitable, Callable, Dict, List, Optional

import logfire
from sqlalchemy import and_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wishyork.domain.error import BatchCommitError, DocumentNotFoundError
from wishyork.domain.model import Comment, CommentChange, merge_change
from wishyork.domain.repository import CommentRepository, WriteBatch
from wishyork.domain.value import ChangeType, CommentId, ContentRef
from wishyork.persistence.mappers import comment_to_dict, row_to_comment
from wishyork.persistence.tables import comments_table, contents_table

Changes = Dict[CommentId, CommentChange]
Operation = Callable[[AsyncSession, Changes], Awaitable[None]]


def _in_content(content: ContentRef):
    return and_(
        comments_table.c.content_type == content.type.value,
        comments_table.c.content_id == content.id,
    )


class PostgresWriteBatch(WriteBatch):
    """Write batch executed inside one SAVEPOINT and committed together.

    Counter writes are ``col = col + :delta`` updates, so the database
    applies them against the current row value.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._operations: List[Operation] = []
        self._committed = False

    def _stage(self, operation: Operation) -> None:
        if self._committed:
            raise BatchCommitError("Write batch already committed")
        self._operations.append(operation)

    def create_comment(self, comment: Comment) -> None:
        async def apply(session: AsyncSession, changes: Changes) -> None:
            stmt = (
                comments_table.insert()
                .values(**comment_to_dict(comment))
                .returning(comments_table)
            )
            row = (await session.execute(stmt)).one()
            created = row_to_comment(row._asdict())
            merge_change(changes, CommentChange(type=ChangeType.ADDED, comment=created))

        self._stage(apply)

    def delete_comment(self, comment: Comment) -> None:
        async def apply(session: AsyncSession, changes: Changes) -> None:
            stmt = (
                comments_table.delete()
                .where(comments_table.c.id == comment.id)
                .where(_in_content(comment.content))
                .returning(comments_table)
            )
            row = (await session.execute(stmt)).fetchone()
            if row is None:
                # Deleting a missing row is a no-op
                return
            removed = row_to_comment(row._asdict())
            merge_change(
                changes, CommentChange(type=ChangeType.REMOVED, comment=removed)
            )

        self._stage(apply)

    def increment_reply_count(
        self, content: ContentRef, comment_id: CommentId, delta: int
    ) -> None:
        async def apply(session: AsyncSession, changes: Changes) -> None:
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment_id)
                .where(_in_content(content))
                .where(comments_table.c.kind == "top_level")
                .values(reply_count=comments_table.c.reply_count + delta)
                .returning(comments_table)
            )
            row = (await session.execute(stmt)).fetchone()
            if row is None:
                raise DocumentNotFoundError(f"{content}/comments", str(comment_id))
            updated = row_to_comment(row._asdict())
            merge_change(
                changes, CommentChange(type=ChangeType.MODIFIED, comment=updated)
            )

        self._stage(apply)

    def increment_comment_count(self, content: ContentRef, delta: int) -> None:
        async def apply(session: AsyncSession, changes: Changes) -> None:
            stmt = (
                contents_table.update()
                .where(contents_table.c.type == content.type.value)
                .where(contents_table.c.id == content.id)
                .values(comment_count=contents_table.c.comment_count + delta)
                .returning(contents_table.c.id)
            )
            row = (await session.execute(stmt)).fetchone()
            if row is None:
                raise DocumentNotFoundError(f"{content.type.value}s", str(content.id))

        self._stage(apply)

    async def commit(self) -> List[CommentChange]:
        """Apply all staged writes in one transaction, or none of them."""
        if self._committed:
            raise BatchCommitError("Write batch already committed")
        self._committed = True

        changes: Changes = {}
        try:
            async with self.session.begin_nested():
                for operation in self._operations:
                    await operation(self.session, changes)
            await self.session.commit()
        except DocumentNotFoundError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logfire.error("Write batch failed", error=str(e))
            raise BatchCommitError(f"Batch commit failed: {e}") from e

        return list(changes.values())


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, content: ContentRef, comment_id: CommentId
    ) -> Optional[Comment]:
        """Find a comment by ID within a content item."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(_in_content(content))
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_content(self, content: ContentRef) -> List[Comment]:
        """Find all comments for a content item, oldest first."""
        stmt = (
            select(comments_table)
            .where(_in_content(content))
            .order_by(comments_table.c.created_at, comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_replies(
        self, content: ContentRef, parent_id: CommentId
    ) -> List[Comment]:
        """Find direct replies to a comment, oldest first."""
        stmt = (
            select(comments_table)
            .where(_in_content(content))
            .where(comments_table.c.parent_id == parent_id)
            .order_by(comments_table.c.created_at, comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    def batch(self) -> WriteBatch:
        """Start a write batch on this repository's session."""
        return PostgresWriteBatch(self.session)
