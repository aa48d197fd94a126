"""Application layer DI providers."""

from dishka import Scope, provide

from wishyork.application.usecase.comment import (
    AddCommentUseCase,
    DeleteCommentUseCase,
    GetCommentThreadUseCase,
    OpenCommentStreamUseCase,
    ReportCommentUseCase,
)
from wishyork.domain.service import CommentService, ReportService, UserService
from wishyork.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed.

    Use cases are REQUEST-scoped like the domain services they orchestrate.
    """

    scope = Scope.REQUEST

    @provide
    def get_add_comment_use_case(
        self, comment_service: CommentService, user_service: UserService
    ) -> AddCommentUseCase:
        """Provide add comment use case."""
        return AddCommentUseCase(
            comment_service=comment_service, user_service=user_service
        )

    @provide
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide
    def get_comment_thread_use_case(
        self, comment_service: CommentService
    ) -> GetCommentThreadUseCase:
        """Provide get comment thread use case."""
        return GetCommentThreadUseCase(comment_service=comment_service)

    @provide
    def get_open_comment_stream_use_case(
        self, comment_service: CommentService
    ) -> OpenCommentStreamUseCase:
        """Provide open comment stream use case."""
        return OpenCommentStreamUseCase(comment_service=comment_service)

    @provide
    def get_report_comment_use_case(
        self, report_service: ReportService
    ) -> ReportCommentUseCase:
        """Provide report comment use case."""
        return ReportCommentUseCase(report_service=report_service)
