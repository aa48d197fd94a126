"""In-memory user profile repository for testing."""

from typing import Optional

from wishyork.domain.model.user import UserProfile
from wishyork.domain.repository.user import UserRepository
from wishyork.domain.value import UserId

from .store import InMemoryDocumentStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, store: InMemoryDocumentStore | None = None) -> None:
        self.store = store or InMemoryDocumentStore()

    async def find_by_id(self, user_id: UserId) -> Optional[UserProfile]:
        """Find a user profile by ID."""
        return self.store.users.get(user_id)

    async def save(self, user: UserProfile) -> UserProfile:
        """Save or update a user profile."""
        self.store.users[user.id] = user
        return user
