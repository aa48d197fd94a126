"""Comment domain service."""

from uuid import uuid4

import logfire

from wishyork.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from wishyork.domain.model import AuthorSnapshot, Comment, Reply, TopLevel
from wishyork.domain.repository import (
    CommentFeed,
    CommentRepository,
    CommentSubscription,
    ContentRepository,
)
from wishyork.domain.service.comment_tree import (
    CommentThread,
    CommentThreadView,
    build_comment_tree,
)
from wishyork.domain.value import (
    CommentId,
    ContentRef,
    UserId,
    normalize_comment_text,
)

from .base import Service


class CommentService(Service):
    """Domain service for comment threads.

    Keeps the denormalized counters in step with the stored records:
    - reply_count on a top-level comment equals its stored replies
    - comment_count on the content item equals all stored comments and replies

    Every write goes through a single atomic batch using relative
    increments. Committed changes are then published to the feed.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        content_repository: ContentRepository,
        comment_feed: CommentFeed,
        max_length: int = 300,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            content_repository: Content repository
            comment_feed: Change feed for live subscribers
            max_length: Maximum comment length in characters
        """
        self.comment_repository = comment_repository
        self.content_repository = content_repository
        self.comment_feed = comment_feed
        self.max_length = max_length

    async def _require_content(self, content: ContentRef) -> None:
        found = await self.content_repository.find_by_ref(content)
        if not found:
            logfire.warn("Content not found", content=str(content))
            raise NotFoundError(content.type.value.capitalize(), str(content.id))

    async def add_comment(
        self,
        content: ContentRef,
        author: AuthorSnapshot,
        text: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Add a top-level comment or a reply.

        One batch creates the comment, bumps the parent's reply_count when
        replying and bumps the content's comment_count.

        Args:
            content: Post or wishlist being commented on
            author: Author snapshot to store on the comment
            text: Comment text
            parent_id: Top-level comment being replied to (None for top-level)

        Returns:
            Created comment with its store-assigned created_at

        Raises:
            ValidationError: If text is blank or too long
            NotFoundError: If content or parent comment not found
            BusinessRuleViolationError: If parent is itself a reply
            BatchCommitError: If the batch fails; nothing was written
        """
        with logfire.span(
            "comment_service.add_comment",
            content=str(content),
            author_id=str(author.author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            try:
                text = normalize_comment_text(text, self.max_length)
            except ValueError as e:
                raise ValidationError(str(e)) from e

            await self._require_content(content)

            placement: TopLevel | Reply = TopLevel()
            if parent_id:
                parent = await self.comment_repository.find_by_id(content, parent_id)
                if not parent:
                    logfire.error(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        content=str(content),
                    )
                    raise NotFoundError("Comment", str(parent_id))
                placement = Reply.to(parent)

            comment = Comment(
                id=CommentId(uuid4()),
                content=content,
                author=author,
                text=text,
                placement=placement,
            )

            batch = self.comment_repository.batch()
            batch.create_comment(comment)
            if parent_id:
                batch.increment_reply_count(content, parent_id, 1)
            batch.increment_comment_count(content, 1)
            changes = await batch.commit()

            await self.comment_feed.publish(content, changes)

            created = next(
                (ch.comment for ch in changes if ch.comment.id == comment.id),
                comment,
            )
            logfire.info(
                "Comment added",
                comment_id=str(created.id),
                content=str(content),
                is_reply=created.is_reply,
            )
            return created

    async def delete_comment(
        self, content: ContentRef, comment_id: CommentId, actor_id: UserId
    ) -> int:
        """Delete a comment and, for a top-level comment, all its replies.

        The replies are read first, then one batch deletes the comment and
        those replies, decrements the parent's reply_count when deleting a
        reply, and decrements comment_count by the number of records removed.
        A reply added after the read is not seen and stays behind as an
        orphan (see sweep_orphaned_replies).

        Args:
            content: Post or wishlist owning the comment
            comment_id: Comment to delete
            actor_id: User requesting the delete (must be the author)

        Returns:
            Number of records removed

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If actor is not the author
            BatchCommitError: If the batch fails; nothing was removed
        """
        with logfire.span(
            "comment_service.delete_comment",
            content=str(content),
            comment_id=str(comment_id),
            actor_id=str(actor_id),
        ):
            comment = await self.comment_repository.find_by_id(content, comment_id)
            if not comment:
                logfire.warn("Comment not found for delete", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            if comment.author.author_id != actor_id:
                logfire.warn(
                    "Delete attempted by non-author",
                    comment_id=str(comment_id),
                    actor_id=str(actor_id),
                )
                raise NotAuthorizedError("comment", str(comment_id), str(actor_id))

            replies: list[Comment] = []
            if not comment.is_reply:
                replies = await self.comment_repository.find_replies(
                    content, comment.id
                )

            batch = self.comment_repository.batch()
            batch.delete_comment(comment)
            for reply in replies:
                batch.delete_comment(reply)

            if comment.parent_id is not None:
                parent = await self.comment_repository.find_by_id(
                    content, comment.parent_id
                )
                if parent:
                    batch.increment_reply_count(content, comment.parent_id, -1)
                else:
                    logfire.warn(
                        "Deleting reply whose parent is gone",
                        comment_id=str(comment.id),
                        parent_id=str(comment.parent_id),
                    )

            removed = 1 + len(replies)
            batch.increment_comment_count(content, -removed)
            changes = await batch.commit()

            await self.comment_feed.publish(content, changes)
            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                content=str(content),
                removed=removed,
            )
            return removed

    async def get_comments(self, content: ContentRef) -> list[Comment]:
        """Get the flat comment list for a content item, oldest first.

        Args:
            content: Post or wishlist

        Returns:
            Comments and replies ordered by created_at
        """
        with logfire.span("comment_service.get_comments", content=str(content)):
            comments = await self.comment_repository.find_by_content(content)
            logfire.info(
                "Comments retrieved", content=str(content), count=len(comments)
            )
            return comments

    async def get_thread(self, content: ContentRef) -> list[CommentThread]:
        """Get the two-level display tree for a content item.

        Raises:
            NotFoundError: If the content item does not exist
        """
        await self._require_content(content)
        return build_comment_tree(await self.get_comments(content))

    async def open_thread_stream(
        self, content: ContentRef
    ) -> tuple[CommentSubscription, CommentThreadView]:
        """Subscribe to a thread and take its initial snapshot.

        The subscription is opened before the snapshot is read, so any
        batch committed in between is delivered as an event too.

        Args:
            content: Post or wishlist to watch

        Returns:
            Open subscription and a view seeded with the snapshot

        Raises:
            NotFoundError: If the content item does not exist
        """
        with logfire.span("comment_service.open_thread_stream", content=str(content)):
            await self._require_content(content)
            subscription = await self.comment_feed.subscribe(content)
            try:
                comments = await self.comment_repository.find_by_content(content)
            except Exception:
                await subscription.close()
                raise
            return subscription, CommentThreadView(content, comments)

    async def sweep_orphaned_replies(self, content: ContentRef) -> int:
        """Delete replies whose parent comment no longer exists.

        Orphans come from a reply committed between a cascading delete's
        read and its batch. Their records still count toward
        comment_count, so the count drops by the number removed.
        Only runs when invoked explicitly.

        Args:
            content: Post or wishlist to reconcile

        Returns:
            Number of orphaned replies removed
        """
        with logfire.span(
            "comment_service.sweep_orphaned_replies", content=str(content)
        ):
            comments = await self.comment_repository.find_by_content(content)
            top_level_ids = {c.id for c in comments if not c.is_reply}
            orphans = [
                c for c in comments if c.is_reply and c.parent_id not in top_level_ids
            ]
            if not orphans:
                logfire.info("No orphaned replies", content=str(content))
                return 0

            batch = self.comment_repository.batch()
            for orphan in orphans:
                batch.delete_comment(orphan)
            batch.increment_comment_count(content, -len(orphans))
            changes = await batch.commit()

            await self.comment_feed.publish(content, changes)
            logfire.warn(
                "Orphaned replies removed", content=str(content), count=len(orphans)
            )
            return len(orphans)
