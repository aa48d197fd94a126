"""Unit tests for DeleteCommentUseCase."""

from uuid import uuid4

import pytest

from wishyork.application.usecase.comment import (
    DeleteCommentRequest,
    DeleteCommentUseCase,
)
from wishyork.domain.error import NotAuthorizedError
from wishyork.domain.repository import ContentRepository
from wishyork.domain.service import CommentService
from wishyork.domain.value import ContentType
from tests.conftest import make_author, seed_content
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestDeleteCommentUseCase:
    """Tests for DeleteCommentUseCase."""

    @pytest.mark.asyncio
    async def test_delete_cascades_and_reports_removed(self, unit_env):
        # Arrange
        use_case = await unit_env.get(DeleteCommentUseCase)
        comment_service = await unit_env.get(CommentService)
        content_repo = await unit_env.get(ContentRepository)
        content = await seed_content(unit_env)
        author = make_author()
        parent = await comment_service.add_comment(content, author, "Parent")
        await comment_service.add_comment(
            content, make_author("bob"), "Reply", parent_id=parent.id
        )

        # Act
        response = await use_case.execute(
            DeleteCommentRequest(
                content_type=ContentType.POST,
                content_id=str(content.id),
                comment_id=str(parent.id),
                actor_id=str(author.author_id),
            )
        )

        # Assert
        assert response.comment_id == str(parent.id)
        assert response.removed == 2
        assert (await content_repo.find_by_ref(content)).comment_count == 0

    @pytest.mark.asyncio
    async def test_non_author_is_rejected(self, unit_env):
        # Arrange
        use_case = await unit_env.get(DeleteCommentUseCase)
        comment_service = await unit_env.get(CommentService)
        content = await seed_content(unit_env)
        comment = await comment_service.add_comment(content, make_author(), "Mine")

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                DeleteCommentRequest(
                    content_type=ContentType.POST,
                    content_id=str(content.id),
                    comment_id=str(comment.id),
                    actor_id=str(uuid4()),
                )
            )

    @pytest.mark.asyncio
    async def test_malformed_comment_id_raises_value_error(self, unit_env):
        # Arrange
        use_case = await unit_env.get(DeleteCommentUseCase)
        content = await seed_content(unit_env)

        # Act & Assert
        with pytest.raises(ValueError):
            await use_case.execute(
                DeleteCommentRequest(
                    content_type=ContentType.POST,
                    content_id=str(content.id),
                    comment_id="42",
                    actor_id=str(uuid4()),
                )
            )
