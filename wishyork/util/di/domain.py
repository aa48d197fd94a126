"""Domain layer DI providers."""

from dishka import Scope, provide

from wishyork.config import AuthSettings, CommentSettings
from wishyork.domain.repository import (
    CommentFeed,
    CommentRepository,
    ContentRepository,
    ReportRepository,
    UserRepository,
)
from wishyork.domain.service import (
    CommentService,
    JWTService,
    ReportService,
    UserService,
)
from wishyork.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        content_repository: ContentRepository,
        comment_feed: CommentFeed,
        comment_settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            content_repository=content_repository,
            comment_feed=comment_feed,
            max_length=comment_settings.max_length,
        )

    @provide
    def get_report_service(
        self,
        report_repository: ReportRepository,
        comment_repository: CommentRepository,
    ) -> ReportService:
        """Provide comment report domain service."""
        return ReportService(
            report_repository=report_repository,
            comment_repository=comment_repository,
        )

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)
