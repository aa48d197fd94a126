"""Unit tests for the Comment model and its placement."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from wishyork.domain.error import BusinessRuleViolationError
from wishyork.domain.model import Comment, Reply, TopLevel
from wishyork.domain.value import CommentId
from tests.conftest import make_author, make_comment, make_content_ref


class TestPlacement:
    """Tests for top-level vs reply placement."""

    def test_new_comment_is_top_level_with_zero_replies(self):
        """A comment built without placement is top-level with reply_count 0."""
        # Act
        comment = Comment(
            id=CommentId(uuid4()),
            content=make_content_ref(),
            author=make_author(),
            text="First!",
        )

        # Assert
        assert isinstance(comment.placement, TopLevel)
        assert comment.reply_count == 0
        assert comment.parent_id is None
        assert comment.is_reply is False

    def test_reply_to_top_level_records_parent_and_username(self):
        """Reply.to copies the parent id and the parent's username."""
        # Arrange
        content = make_content_ref()
        parent = make_comment(content, author=make_author("bob"))

        # Act
        reply = make_comment(content, parent=parent)

        # Assert
        assert reply.is_reply
        assert reply.parent_id == parent.id
        assert str(reply.placement.parent_author_username) == "bob"
        assert reply.reply_count == 0

    def test_reply_to_reply_is_rejected(self):
        """A reply cannot be the parent of another reply."""
        # Arrange
        content = make_content_ref()
        parent = make_comment(content)
        reply = make_comment(content, parent=parent)

        # Act & Assert
        with pytest.raises(BusinessRuleViolationError, match="one level deep"):
            Reply.to(reply)

    def test_placement_round_trips_through_discriminator(self):
        """Placement dicts are parsed into the right variant by kind."""
        # Arrange
        content = make_content_ref()
        parent = make_comment(content)
        reply = make_comment(content, parent=parent)

        # Act
        restored = Comment.model_validate(reply.model_dump())

        # Assert
        assert isinstance(restored.placement, Reply)
        assert restored.parent_id == parent.id

    def test_negative_reply_count_is_invalid(self):
        """reply_count can never go below zero."""
        with pytest.raises(ValidationError):
            TopLevel(reply_count=-1)


class TestWithReplyCount:
    """Tests for with_reply_count."""

    def test_returns_updated_copy(self):
        """The copied-from comment is left untouched."""
        # Arrange
        comment = make_comment(make_content_ref(), reply_count=2)

        # Act
        updated = comment.with_reply_count(3)

        # Assert
        assert updated.reply_count == 3
        assert comment.reply_count == 2
        assert updated.id == comment.id

    def test_reply_has_no_counter(self):
        """Replies reject reply counter updates."""
        # Arrange
        content = make_content_ref()
        reply = make_comment(content, parent=make_comment(content))

        # Act & Assert
        with pytest.raises(BusinessRuleViolationError):
            reply.with_reply_count(1)


class TestCommentText:
    """Tests for comment text validation at model level."""

    def test_empty_text_is_invalid(self):
        with pytest.raises(ValidationError):
            make_comment(make_content_ref(), text="")
