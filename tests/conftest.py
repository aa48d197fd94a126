"""Test configuration and helpers."""

from datetime import datetime, timedelta
from uuid import uuid4

from wishyork.domain.model import AuthorSnapshot, Comment, Content, Reply, TopLevel
from wishyork.domain.repository import ContentRepository
from wishyork.domain.value import (
    CommentId,
    ContentId,
    ContentRef,
    ContentType,
    UserId,
    Username,
)


def make_author(username: str = "alice", name: str | None = None) -> AuthorSnapshot:
    """Author snapshot with a fresh user id."""
    return AuthorSnapshot(
        author_id=UserId(uuid4()),
        name=name or username.capitalize(),
        username=Username(username),
        avatar_url=f"https://cdn.wishyork.test/{username}.png",
    )


def make_content_ref(content_type: ContentType = ContentType.POST) -> ContentRef:
    return ContentRef(type=content_type, id=ContentId(uuid4()))


def make_content(
    ref: ContentRef | None = None, comment_count: int = 0, title: str = "Birthday list"
) -> Content:
    return Content(
        ref=ref or make_content_ref(),
        author_id=UserId(uuid4()),
        title=title,
        comment_count=comment_count,
    )


async def seed_content(
    env, content_type: ContentType = ContentType.POST, comment_count: int = 0
) -> ContentRef:
    """Save a content item through the container's ContentRepository."""
    content_repo = await env.get(ContentRepository)
    content = make_content(make_content_ref(content_type), comment_count=comment_count)
    await content_repo.save(content)
    return content.ref


_BASE_TIME = datetime(2026, 1, 1, 12, 0, 0)


def make_comment(
    content: ContentRef,
    *,
    parent: Comment | None = None,
    author: AuthorSnapshot | None = None,
    text: str = "Love this!",
    reply_count: int = 0,
    minute: int = 0,
) -> Comment:
    """Comment with a fixed created_at so ordering in tests is explicit."""
    placement = Reply.to(parent) if parent else TopLevel(reply_count=reply_count)
    return Comment(
        id=CommentId(uuid4()),
        content=content,
        author=author or make_author(),
        text=text,
        placement=placement,
        created_at=_BASE_TIME + timedelta(minutes=minute),
    )
