"""Comment change feed interface.

The feed is the subscription channel: writers publish each committed
batch per content item and subscribers receive whole batches in commit
order, so a view never shows half of a batch.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Sequence

from wishyork.domain.model.change import CommentChange
from wishyork.domain.value import ContentRef


class CommentSubscription(ABC):
    """Live subscription to one content item's comment changes."""

    content: ContentRef
    lagged: bool = False  # Closed by the feed after missing events

    @property
    @abstractmethod
    def closed(self) -> bool:
        """True once no further changes will be delivered."""
        pass

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[list[CommentChange]]:
        pass

    @abstractmethod
    async def get(
        self, timeout: float | None = None
    ) -> list[CommentChange] | None:
        """Wait for the next committed batch.

        Args:
            timeout: Seconds to wait, None to wait forever

        Returns:
            The changes of the next batch in commit order, or None if the
            timeout elapsed or the subscription is closed
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Stop receiving changes. Safe to call more than once."""
        pass


class CommentFeed(ABC):
    """Publish/subscribe channel for committed comment changes."""

    @abstractmethod
    async def publish(
        self, content: ContentRef, changes: Sequence[CommentChange]
    ) -> int:
        """Deliver one committed batch to every subscriber of a content item.

        The batch is delivered as a single item.

        Args:
            content: Content item the changes belong to
            changes: Changes of one committed batch in commit order

        Returns:
            Number of subscribers the batch was delivered to
        """
        pass

    @abstractmethod
    async def subscribe(self, content: ContentRef) -> CommentSubscription:
        """Open a subscription for a content item.

        Args:
            content: Content item to watch

        Returns:
            Subscription receiving changes published after this call
        """
        pass
