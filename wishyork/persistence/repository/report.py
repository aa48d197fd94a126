"""PostgreSQL implementation of Report repository."""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wishyork.domain.model import CommentReport
from wishyork.domain.repository import ReportRepository
from wishyork.domain.value import CommentId
from wishyork.persistence.mappers import report_to_dict, row_to_report
from wishyork.persistence.tables import comment_reports_table


class PostgresReportRepository(ReportRepository):
    """PostgreSQL implementation of ReportRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, report: CommentReport) -> CommentReport:
        """Insert a report. Reports are never updated from here."""
        stmt = comment_reports_table.insert().values(**report_to_dict(report))
        await self.session.execute(stmt)
        await self.session.flush()
        return report

    async def find_by_comment(self, comment_id: CommentId) -> List[CommentReport]:
        """Find reports filed against a comment, oldest first."""
        stmt = (
            select(comment_reports_table)
            .where(comment_reports_table.c.comment_id == comment_id)
            .order_by(comment_reports_table.c.reported_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_report(dict(row)) for row in result.mappings().all()]
