"""Async PostgreSQL engine and sessions."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from wishyork.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg engine described by ``settings.database``.

    SQL is echoed when ``debug`` is on.
    """
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for request-scoped sessions.

    Rows are mapped to immutable domain models straight away, so nothing
    needs expiring on commit; write batches flush and commit explicitly.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@asynccontextmanager
async def get_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Open a session for a script or job outside the DI container."""
    async with session_factory() as session:
        yield session
