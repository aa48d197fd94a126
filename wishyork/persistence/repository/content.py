"""PostgreSQL implementation of Content repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wishyork.domain.model import Content
from wishyork.domain.repository import ContentRepository
from wishyork.domain.value import ContentRef
from wishyork.persistence.mappers import content_to_dict, row_to_content
from wishyork.persistence.tables import contents_table


class PostgresContentRepository(ContentRepository):
    """PostgreSQL implementation of ContentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_ref(self, ref: ContentRef) -> Optional[Content]:
        """Find a post or wishlist.

        Args:
            ref: Content type and ID

        Returns:
            Content if found, None otherwise
        """
        stmt = (
            select(contents_table)
            .where(contents_table.c.type == ref.type.value)
            .where(contents_table.c.id == ref.id)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_content(dict(row)) if row else None

    async def save(self, content: Content) -> Content:
        """Save a content item (create or update).

        comment_count is only written on insert; afterwards it moves
        through write batches alone.

        Args:
            content: Content to save

        Returns:
            Saved content
        """
        existing = await self.find_by_ref(content.ref)
        content_dict = content_to_dict(content)

        if existing:
            content_dict.pop("comment_count")
            stmt = (
                contents_table.update()
                .where(contents_table.c.type == content.ref.type.value)
                .where(contents_table.c.id == content.ref.id)
                .values(**content_dict)
            )
            await self.session.execute(stmt)
        else:
            stmt = contents_table.insert().values(**content_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return await self.find_by_ref(content.ref) or content
