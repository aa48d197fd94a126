"""User profile repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from wishyork.domain.model.user import UserProfile
from wishyork.domain.value import UserId


class UserRepository(ABC):
    """Repository for user profiles."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[UserProfile]:
        """Find a user profile by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: UserProfile) -> UserProfile:
        """Save a user profile (create or update).

        Args:
            user: The profile to save

        Returns:
            The saved profile
        """
        pass
