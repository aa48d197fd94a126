"""Unit tests for the in-process comment feed."""

import pytest

from wishyork.domain.model import CommentChange
from wishyork.domain.value import ChangeType
from wishyork.persistence.feed import InMemoryCommentFeed
from tests.conftest import make_comment, make_content_ref


def _added(content, text: str = "hi") -> CommentChange:
    return CommentChange(type=ChangeType.ADDED, comment=make_comment(content, text=text))


class TestPublish:
    """Tests for InMemoryCommentFeed.publish()."""

    @pytest.mark.asyncio
    async def test_each_publish_arrives_as_one_batch(self):
        # Arrange
        feed = InMemoryCommentFeed()
        content = make_content_ref()
        subscription = await feed.subscribe(content)
        changes = [_added(content, f"#{i}") for i in range(3)]

        # Act
        delivered = await feed.publish(content, changes[:2])
        await feed.publish(content, changes[2:])

        # Assert
        assert delivered == 1
        assert await subscription.get(timeout=1) == changes[:2]
        assert await subscription.get(timeout=1) == changes[2:]
        assert await subscription.get(timeout=0.01) is None

    @pytest.mark.asyncio
    async def test_only_subscribers_of_that_content_receive(self):
        # Arrange
        feed = InMemoryCommentFeed()
        watched, other = make_content_ref(), make_content_ref()
        subscription = await feed.subscribe(watched)

        # Act
        delivered = await feed.publish(other, [_added(other)])

        # Assert
        assert delivered == 0
        assert await subscription.get(timeout=0.01) is None

    @pytest.mark.asyncio
    async def test_changes_before_subscribe_are_not_replayed(self):
        # Arrange
        feed = InMemoryCommentFeed()
        content = make_content_ref()
        await feed.publish(content, [_added(content)])

        # Act
        subscription = await feed.subscribe(content)

        # Assert
        assert await subscription.get(timeout=0.01) is None

    @pytest.mark.asyncio
    async def test_empty_publish_delivers_nothing(self):
        # Arrange
        feed = InMemoryCommentFeed()
        content = make_content_ref()
        await feed.subscribe(content)

        # Act & Assert
        assert await feed.publish(content, []) == 0


class TestSubscriptionLifecycle:
    """Tests for closing and lagging subscriptions."""

    @pytest.mark.asyncio
    async def test_close_stops_delivery_and_unregisters(self):
        # Arrange
        feed = InMemoryCommentFeed()
        content = make_content_ref()
        subscription = await feed.subscribe(content)

        # Act
        await subscription.close()
        delivered = await feed.publish(content, [_added(content)])

        # Assert
        assert subscription.closed
        assert delivered == 0
        assert feed.subscriber_count(content) == 0
        assert await subscription.get() is None

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        # Arrange
        feed = InMemoryCommentFeed()
        subscription = await feed.subscribe(make_content_ref())

        # Act
        await subscription.close()
        await subscription.close()

        # Assert
        assert subscription.closed

    @pytest.mark.asyncio
    async def test_iteration_ends_when_closed(self):
        # Arrange
        feed = InMemoryCommentFeed()
        content = make_content_ref()
        subscription = await feed.subscribe(content)
        change = _added(content)
        await feed.publish(content, [change])

        # Act
        received = []
        async for item in subscription:
            received.append(item)
            await subscription.close()

        # Assert
        assert received == [[change]]

    @pytest.mark.asyncio
    async def test_overflow_closes_only_the_slow_subscriber(self):
        """A full queue marks that subscriber lagged and drops it."""
        # Arrange
        feed = InMemoryCommentFeed(queue_size=2)
        content = make_content_ref()
        slow = await feed.subscribe(content)
        await feed.publish(content, [_added(content)])
        await feed.publish(content, [_added(content)])
        fast = await feed.subscribe(content)

        # Act
        delivered = await feed.publish(content, [_added(content)])

        # Assert
        assert delivered == 1
        assert slow.lagged and slow.closed
        assert await slow.get(timeout=0.01) is None
        assert not fast.lagged
        assert await fast.get(timeout=1) is not None
        assert feed.subscriber_count(content) == 1

    @pytest.mark.asyncio
    async def test_queue_slots_count_batches_not_changes(self):
        # Arrange
        feed = InMemoryCommentFeed(queue_size=1)
        content = make_content_ref()
        subscription = await feed.subscribe(content)
        batch = [_added(content, f"#{i}") for i in range(5)]

        # Act
        delivered = await feed.publish(content, batch)

        # Assert
        assert delivered == 1
        assert not subscription.lagged
        assert await subscription.get(timeout=1) == batch
