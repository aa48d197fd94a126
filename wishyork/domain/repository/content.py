"""Content repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from wishyork.domain.model.content import Content
from wishyork.domain.value import ContentRef


class ContentRepository(ABC):
    """Repository for posts and wishlists that own comment threads."""

    @abstractmethod
    async def find_by_ref(self, ref: ContentRef) -> Optional[Content]:
        """Find a content item.

        Args:
            ref: Content type and ID

        Returns:
            The content item if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, content: Content) -> Content:
        """Save a content item (create or update).

        Args:
            content: The content item to save

        Returns:
            The saved content item
        """
        pass
