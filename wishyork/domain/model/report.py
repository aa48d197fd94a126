"""Comment report submitted for moderation."""

from datetime import datetime

from pydantic import Field

from wishyork.domain.model.common import DomainModel
from wishyork.domain.value import CommentId, ContentRef, ReportId, ReportStatus, UserId

DEFAULT_REPORT_REASON = "User reported from menu."


class CommentReport(DomainModel):
    """A user's report against a comment."""

    id: ReportId
    comment_id: CommentId
    content: ContentRef
    reported_by: UserId
    reason: str = Field(default=DEFAULT_REPORT_REASON, min_length=1, max_length=500)
    status: ReportStatus = ReportStatus.NEW
    reported_at: datetime = Field(default_factory=datetime.now)
