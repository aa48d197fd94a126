"""Change events delivered to comment thread subscribers."""

from wishyork.domain.model.comment import Comment
from wishyork.domain.model.common import DomainModel
from wishyork.domain.value import ChangeType, CommentId


class CommentChange(DomainModel):
    """One committed change to a comment document.

    For ``removed`` the comment is its last known state.
    """

    type: ChangeType
    comment: Comment


def merge_change(changes: dict[CommentId, CommentChange], change: CommentChange) -> None:
    """Fold a change into the per-batch change log, keyed by comment id.

    A batch reports at most one change per comment, placed at the
    position of its latest write. A comment created in the batch stays
    ``added`` through later modifications and disappears entirely if the
    same batch deletes it.
    """
    comment_id = change.comment.id
    previous = changes.pop(comment_id, None)
    if previous is not None and previous.type == ChangeType.ADDED:
        if change.type == ChangeType.REMOVED:
            return
        change = CommentChange(type=ChangeType.ADDED, comment=change.comment)
    changes[comment_id] = change
