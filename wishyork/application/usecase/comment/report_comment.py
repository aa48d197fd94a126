"""Report comment use case."""

from datetime import datetime

from pydantic import BaseModel

from wishyork.application.usecase.base import BaseUseCase
from wishyork.domain.service import ReportService
from wishyork.domain.value import ContentType, ReportStatus

from .parsing import parse_comment_id, parse_content_ref, parse_user_id


class ReportCommentRequest(BaseModel):
    """Report comment request."""

    content_type: ContentType
    content_id: str  # UUID string
    comment_id: str  # UUID string
    reporter_id: str  # User ID from authenticated user
    reason: str | None = None


class ReportCommentResponse(BaseModel):
    """Report comment response."""

    report_id: str
    comment_id: str
    status: ReportStatus
    reported_at: datetime


class ReportCommentUseCase(BaseUseCase):
    """Use case for flagging a comment for moderation."""

    def __init__(self, report_service: ReportService) -> None:
        self.report_service = report_service

    async def execute(self, request: ReportCommentRequest) -> ReportCommentResponse:
        """Execute report flow.

        Raises:
            ValueError: If an id is malformed
            NotFoundError: If the comment does not exist
            ValidationError: If the reason is invalid
        """
        report = await self.report_service.report_comment(
            content=parse_content_ref(request.content_type, request.content_id),
            comment_id=parse_comment_id(request.comment_id),
            reporter_id=parse_user_id(request.reporter_id),
            reason=request.reason,
        )

        return ReportCommentResponse(
            report_id=str(report.id),
            comment_id=str(report.comment_id),
            status=report.status,
            reported_at=report.reported_at,
        )
