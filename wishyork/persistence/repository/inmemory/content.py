"""In-memory content repository for testing."""

from typing import Optional

from wishyork.domain.model.content import Content
from wishyork.domain.repository.content import ContentRepository
from wishyork.domain.value import ContentRef

from .store import InMemoryDocumentStore


class InMemoryContentRepository(ContentRepository):
    """In-memory implementation of ContentRepository for testing."""

    def __init__(self, store: InMemoryDocumentStore | None = None) -> None:
        self.store = store or InMemoryDocumentStore()

    async def find_by_ref(self, ref: ContentRef) -> Optional[Content]:
        """Find a post or wishlist."""
        return self.store.contents.get(ref)

    async def save(self, content: Content) -> Content:
        """Save or update a post or wishlist."""
        self.store.contents[content.ref] = content
        return content
