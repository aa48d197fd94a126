"""Strongly typed identifiers for WishYork domain entities.

Using NewType keeps a comment id from being passed where a content or
user id is expected.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
ContentId = NewType("ContentId", UUID)  # Post or wishlist
CommentId = NewType("CommentId", UUID)
ReportId = NewType("ReportId", UUID)
