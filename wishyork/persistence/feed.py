"""In-process comment change feed.

Keeps a registry of bounded queues per content item. Each queue item is
one committed batch. Delivery is local to one process; each web worker
runs its own feed.
"""

import asyncio
from collections.abc import AsyncIterator
from typing import Sequence

import logfire

from wishyork.domain.model.change import CommentChange
from wishyork.domain.repository.feed import CommentFeed, CommentSubscription
from wishyork.domain.value import ContentRef


class QueueSubscription(CommentSubscription):
    """Subscription backed by a bounded asyncio.Queue.

    Each queue item is the change list of one committed batch and a None
    item marks the end of the subscription. When the queue overflows
    the subscriber is marked ``lagged`` and closed, since a view with a
    missing batch can no longer be trusted; the client resubscribes and takes
    a fresh snapshot.
    """

    def __init__(
        self, feed: "InMemoryCommentFeed", content: ContentRef, maxsize: int
    ) -> None:
        self.content = content
        self.lagged = False
        self._feed = feed
        self._queue: asyncio.Queue[list[CommentChange] | None] = asyncio.Queue(
            maxsize=maxsize
        )
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _offer(self, batch: list[CommentChange]) -> bool:
        if self._closed:
            return False
        try:
            self._queue.put_nowait(batch)
            return True
        except asyncio.QueueFull:
            logfire.warn(
                "Comment subscriber lagged, closing", content=str(self.content)
            )
            self.lagged = True
            self._end()
            return False

    def _end(self) -> None:
        self._closed = True
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(None)

    async def get(
        self, timeout: float | None = None
    ) -> list[CommentChange] | None:
        if self._closed and self._queue.empty():
            return None
        try:
            batch = await asyncio.wait_for(self._queue.get(), timeout=timeout)
        except asyncio.TimeoutError:
            return None
        if batch is None:
            # Leave the marker in place for any later reader
            self._queue.put_nowait(None)
        return batch

    async def __aiter__(self) -> AsyncIterator[list[CommentChange]]:
        while True:
            batch = await self.get()
            if batch is None:
                return
            yield batch

    async def close(self) -> None:
        if self._closed:
            return
        self._end()
        await self._feed.remove(self)


class InMemoryCommentFeed(CommentFeed):
    """Per-process publish/subscribe registry for comment changes."""

    def __init__(self, queue_size: int = 200) -> None:
        self.queue_size = queue_size
        self._lock = asyncio.Lock()
        self._subscriptions: dict[ContentRef, set[QueueSubscription]] = {}

    def subscriber_count(self, content: ContentRef) -> int:
        return len(self._subscriptions.get(content, ()))

    async def subscribe(self, content: ContentRef) -> QueueSubscription:
        subscription = QueueSubscription(self, content, self.queue_size)
        async with self._lock:
            self._subscriptions.setdefault(content, set()).add(subscription)
        logfire.info("Comment subscription opened", content=str(content))
        return subscription

    async def remove(self, subscription: QueueSubscription) -> None:
        async with self._lock:
            subscriptions = self._subscriptions.get(subscription.content)
            if not subscriptions:
                return
            subscriptions.discard(subscription)
            if not subscriptions:
                self._subscriptions.pop(subscription.content, None)
        logfire.info(
            "Comment subscription closed", content=str(subscription.content)
        )

    async def publish(
        self, content: ContentRef, changes: Sequence[CommentChange]
    ) -> int:
        if not changes:
            return 0
        batch = list(changes)
        async with self._lock:
            subscriptions = list(self._subscriptions.get(content, set()))
            delivered = 0
            lagged: list[QueueSubscription] = []
            for subscription in subscriptions:
                if subscription._offer(batch):
                    delivered += 1
                elif subscription.lagged:
                    lagged.append(subscription)
            for subscription in lagged:
                remaining = self._subscriptions.get(content)
                if remaining is not None:
                    remaining.discard(subscription)
                    if not remaining:
                        self._subscriptions.pop(content, None)
        return delivered
