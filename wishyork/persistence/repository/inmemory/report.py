"""In-memory report repository for testing."""

from wishyork.domain.model.report import CommentReport
from wishyork.domain.repository.report import ReportRepository
from wishyork.domain.value import CommentId

from .store import InMemoryDocumentStore


class InMemoryReportRepository(ReportRepository):
    """In-memory implementation of ReportRepository for testing."""

    def __init__(self, store: InMemoryDocumentStore | None = None) -> None:
        self.store = store or InMemoryDocumentStore()

    async def save(self, report: CommentReport) -> CommentReport:
        """Save a report."""
        self.store.reports[report.id] = report
        return report

    async def find_by_comment(self, comment_id: CommentId) -> list[CommentReport]:
        """Find reports against a comment, oldest first."""
        reports = [r for r in self.store.reports.values() if r.comment_id == comment_id]
        reports.sort(key=lambda r: r.reported_at)
        return reports
