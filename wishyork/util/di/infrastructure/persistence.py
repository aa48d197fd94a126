"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from wishyork.config import CommentSettings, Settings
from wishyork.domain.repository import (
    CommentFeed,
    CommentRepository,
    ContentRepository,
    ReportRepository,
    UserRepository,
)
from wishyork.persistence.database import create_engine, create_session_factory
from wishyork.persistence.feed import InMemoryCommentFeed
from wishyork.persistence.repository import (
    PostgresCommentRepository,
    PostgresContentRepository,
    PostgresReportRepository,
    PostgresUserRepository,
)
from wishyork.util.di.base import ProviderBase
from wishyork.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_comment_feed(self, comment_settings: CommentSettings) -> CommentFeed:
        """Provide the process-wide comment change feed."""
        return InMemoryCommentFeed(queue_size=comment_settings.stream_queue_size)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        Write batches commit on their own; anything else left in the
        session is committed at the end of the request if no exception
        occurred, or rolled back if one was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_content_repository(self, session: AsyncSession) -> ContentRepository:
        """Provide Content repository."""
        return PostgresContentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_report_repository(self, session: AsyncSession) -> ReportRepository:
        """Provide Report repository."""
        return PostgresReportRepository(session)
