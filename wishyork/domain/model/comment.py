"""Comment entity.

Comments are two-level discussions on posts and wishlists: a top-level
comment may have replies, and a reply may not have replies of its own.
The level is carried by a tagged placement so a third level has no
representation at all.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from wishyork.domain.error import BusinessRuleViolationError
from wishyork.domain.model.common import DomainModel
from wishyork.domain.value import CommentId, ContentRef, UserId, Username
from wishyork.domain.value.common import ValueObject


class AuthorSnapshot(ValueObject):
    """Author details copied onto a comment when it is written.

    Not kept in sync with later profile edits.
    """

    author_id: UserId
    name: str
    username: Username
    avatar_url: Optional[str] = None


class TopLevel(ValueObject):
    """Placement of a comment attached directly to the content item."""

    kind: Literal["top_level"] = "top_level"
    reply_count: int = Field(default=0, ge=0)


class Reply(ValueObject):
    """Placement of a reply to a top-level comment."""

    kind: Literal["reply"] = "reply"
    parent_id: CommentId
    parent_author_username: Optional[Username] = None

    @classmethod
    def to(cls, parent: "Comment") -> "Reply":
        """Build the placement for a reply to ``parent``.

        Raises:
            BusinessRuleViolationError: If parent is itself a reply
        """
        if not isinstance(parent.placement, TopLevel):
            raise BusinessRuleViolationError(
                f"Cannot reply to reply {parent.id}: replies are one level deep"
            )
        return cls(
            parent_id=parent.id,
            parent_author_username=parent.author.username,
        )


Placement = Annotated[Union[TopLevel, Reply], Field(discriminator="kind")]


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a post or wishlist, or a reply to one.

    - content: Parent content item the thread belongs to
    - placement: TopLevel (with denormalized reply_count) or Reply(parent_id)
    - created_at: Assigned by the store at commit, ascending sort key
    """

    id: CommentId
    content: ContentRef
    author: AuthorSnapshot
    text: str = Field(min_length=1)
    placement: Placement = Field(default_factory=TopLevel)
    created_at: Optional[datetime] = None

    @property
    def parent_id(self) -> CommentId | None:
        """Parent comment id, None for top-level comments."""
        if isinstance(self.placement, Reply):
            return self.placement.parent_id
        return None

    @property
    def is_reply(self) -> bool:
        return isinstance(self.placement, Reply)

    @property
    def reply_count(self) -> int:
        """Denormalized reply count; always 0 for replies."""
        if isinstance(self.placement, TopLevel):
            return self.placement.reply_count
        return 0

    def with_reply_count(self, reply_count: int) -> "Comment":
        """Return a copy with a new reply count.

        Raises:
            BusinessRuleViolationError: If this comment is a reply
        """
        if not isinstance(self.placement, TopLevel):
            raise BusinessRuleViolationError(
                f"Reply {self.id} has no reply counter"
            )
        return self.model_copy(update={"placement": TopLevel(reply_count=reply_count)})
