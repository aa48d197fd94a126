"""Comment report domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from wishyork.domain.error import NotFoundError, ValidationError
from wishyork.domain.model import DEFAULT_REPORT_REASON, CommentReport
from wishyork.domain.repository import CommentRepository, ReportRepository
from wishyork.domain.value import CommentId, ContentRef, ReportId, ReportStatus, UserId

from .base import Service


class ReportService(Service):
    """Domain service for reporting comments to moderators."""

    def __init__(
        self,
        report_repository: ReportRepository,
        comment_repository: CommentRepository,
    ) -> None:
        self.report_repository = report_repository
        self.comment_repository = comment_repository

    async def report_comment(
        self,
        content: ContentRef,
        comment_id: CommentId,
        reporter_id: UserId,
        reason: str | None = None,
    ) -> CommentReport:
        """File a report against a comment.

        Args:
            content: Post or wishlist owning the comment
            comment_id: Reported comment
            reporter_id: User filing the report
            reason: Free-text reason (defaults to the menu action text)

        Returns:
            Saved report with status ``new``

        Raises:
            NotFoundError: If the comment does not exist
            ValidationError: If the reason is blank or too long
        """
        with logfire.span(
            "report_service.report_comment",
            content=str(content),
            comment_id=str(comment_id),
            reporter_id=str(reporter_id),
        ):
            comment = await self.comment_repository.find_by_id(content, comment_id)
            if not comment:
                logfire.warn("Reported comment not found", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            try:
                report = CommentReport(
                    id=ReportId(uuid4()),
                    comment_id=comment_id,
                    content=content,
                    reported_by=reporter_id,
                    reason=reason.strip() if reason else DEFAULT_REPORT_REASON,
                    status=ReportStatus.NEW,
                    reported_at=datetime.now(),
                )
            except ValueError as e:
                raise ValidationError(str(e)) from e

            saved = await self.report_repository.save(report)
            logfire.info(
                "Comment reported",
                report_id=str(saved.id),
                comment_id=str(comment_id),
            )
            return saved
