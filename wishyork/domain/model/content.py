"""Parent content item (post or wishlist).

Owned by the wider application; the comment subsystem only reads it and
moves its comment_count.
"""

from datetime import datetime

from pydantic import Field

from wishyork.domain.model.common import DomainModel
from wishyork.domain.value import ContentRef, UserId


class Content(DomainModel):
    """A post or wishlist that owns a comment thread.

    comment_count is the total number of comments and replies attached.
    """

    ref: ContentRef
    author_id: UserId
    title: str = Field(min_length=1, max_length=300)
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
