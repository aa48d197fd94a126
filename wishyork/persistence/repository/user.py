"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from wishyork.domain.model import UserProfile
from wishyork.domain.repository import UserRepository
from wishyork.domain.value import UserId
from wishyork.persistence.mappers import row_to_user, user_to_dict
from wishyork.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """Profiles read when snapshotting comment authors.

    Profiles are owned by the wider application; ``save`` exists for
    seeding and tests and upserts on the primary key.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[UserProfile]:
        stmt = select(users_table).where(users_table.c.id == user_id)
        row = (await self.session.execute(stmt)).mappings().first()
        return row_to_user(dict(row)) if row else None

    async def save(self, user: UserProfile) -> UserProfile:
        values = user_to_dict(user)
        stmt = insert(users_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={k: stmt.excluded[k] for k in values if k not in ("id", "created_at")},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return user
