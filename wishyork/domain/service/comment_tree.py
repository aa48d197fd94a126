"""Comment thread reconstruction.

Turns the flat, oldest-first comment list of one content item into the
two-level structure the UI renders: top-level comments, each with its
replies.
"""

import bisect
from dataclasses import dataclass, field
from typing import Iterable

import logfire

from wishyork.domain.model import Comment, CommentChange
from wishyork.domain.value import ChangeType, CommentId, ContentRef


@dataclass
class CommentThread:
    """Top-level comment and its replies, in creation order."""

    comment: Comment
    replies: list[Comment] = field(default_factory=list)


def build_comment_tree(comments: Iterable[Comment]) -> list[CommentThread]:
    """Rebuild the display tree from a flat comment list.

    Algorithm:
    1. Index every comment id to a node with an empty replies list
    2. Walk the list again: top-level comments go to the output, replies
       are appended to their parent's node

    Both passes keep input order, so an oldest-first input gives
    oldest-first threads and replies. A reply whose parent is not in the
    list is dropped and logged; it is never promoted to top level.

    Args:
        comments: Comments of one content item, created_at ascending

    Returns:
        Top-level threads in input order
    """
    comments = list(comments)
    nodes: dict[CommentId, CommentThread] = {
        c.id: CommentThread(comment=c) for c in comments
    }

    roots: list[CommentThread] = []
    for comment in comments:
        parent_id = comment.parent_id
        if parent_id is None:
            roots.append(nodes[comment.id])
            continue

        parent = nodes.get(parent_id)
        if parent is None or parent.comment.is_reply:
            logfire.warn(
                "Dropping orphaned reply from thread",
                comment_id=str(comment.id),
                parent_id=str(parent_id),
                content=str(comment.content),
            )
            continue
        parent.replies.append(comment)

    return roots


class CommentThreadView:
    """Local state of one subscribed comment thread.

    Holds the flat comment list and applies change events to it. The
    tree is rebuilt from scratch on every call to ``tree``.
    """

    def __init__(self, content: ContentRef, comments: Iterable[Comment]) -> None:
        """Initialize from a snapshot read.

        Args:
            content: Content item being watched
            comments: Snapshot of its comments, created_at ascending
        """
        self.content = content
        self._comments: list[Comment] = list(comments)

    @property
    def comments(self) -> list[Comment]:
        return list(self._comments)

    def _index_of(self, comment_id: CommentId) -> int | None:
        for i, existing in enumerate(self._comments):
            if existing.id == comment_id:
                return i
        return None

    def apply(self, change: CommentChange) -> None:
        """Apply one change event to the local list.

        Args:
            change: Committed change for this content item
        """
        comment = change.comment
        index = self._index_of(comment.id)

        if change.type == ChangeType.REMOVED:
            if index is not None:
                del self._comments[index]
            return

        if index is not None:
            # Snapshot may already include a change published after subscribing
            self._comments[index] = comment
            return

        if change.type == ChangeType.MODIFIED:
            logfire.debug(
                "Modified comment not in local view",
                comment_id=str(comment.id),
                content=str(self.content),
            )
            return

        keys = [c.created_at for c in self._comments]
        position = (
            bisect.bisect_right(keys, comment.created_at)
            if comment.created_at is not None and None not in keys
            else len(self._comments)
        )
        self._comments.insert(position, comment)

    def apply_all(self, changes: Iterable[CommentChange]) -> None:
        """Apply every change of one committed batch, in order."""
        for change in changes:
            self.apply(change)

    def tree(self) -> list[CommentThread]:
        """Rebuild the display tree from the current local list."""
        return build_comment_tree(self._comments)
