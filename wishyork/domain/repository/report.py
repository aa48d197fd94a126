"""Comment report repository interface."""

from abc import ABC, abstractmethod
from typing import List

from wishyork.domain.model.report import CommentReport
from wishyork.domain.value import CommentId


class ReportRepository(ABC):
    """Repository for comment reports."""

    @abstractmethod
    async def save(self, report: CommentReport) -> CommentReport:
        """Save a report.

        Args:
            report: The report to save

        Returns:
            The saved report
        """
        pass

    @abstractmethod
    async def find_by_comment(self, comment_id: CommentId) -> List[CommentReport]:
        """Find reports filed against a comment.

        Args:
            comment_id: The reported comment

        Returns:
            Reports, oldest first
        """
        pass
