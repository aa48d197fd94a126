#!/usr/bin/env python3
"""Remove replies whose parent comment is gone, for one post or wishlist.

A reply committed while its parent's cascading delete was in flight can
outlive the parent. Such replies are hidden from threads but still count
toward comment_count; this sweep deletes them and fixes the count.

Usage:
    python scripts/sweep_orphans.py post 0d9f4c1e-...
    python scripts/sweep_orphans.py wishlist 5b2a...
"""

import argparse
import asyncio
import sys

import logfire

from wishyork.application.usecase.comment.parsing import parse_content_ref
from wishyork.config import Settings
from wishyork.domain.service import CommentService
from wishyork.domain.value import ContentRef, ContentType
from wishyork.persistence.database import create_engine, create_session_factory, get_session
from wishyork.persistence.feed import InMemoryCommentFeed
from wishyork.persistence.repository import (
    PostgresCommentRepository,
    PostgresContentRepository,
)
from wishyork.util.observability import configure_logfire


async def sweep(settings: Settings, content: ContentRef) -> int:
    engine = create_engine(settings)
    try:
        session_factory = create_session_factory(engine)
        async with get_session(session_factory) as session:
            service = CommentService(
                comment_repository=PostgresCommentRepository(session),
                content_repository=PostgresContentRepository(session),
                # No live subscribers in this process
                comment_feed=InMemoryCommentFeed(),
                max_length=settings.comments.max_length,
            )
            return await service.sweep_orphaned_replies(content)
    finally:
        await engine.dispose()


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("content_type", choices=[t.value for t in ContentType])
    parser.add_argument("content_id")
    args = parser.parse_args()

    settings = Settings()
    configure_logfire(settings)

    try:
        content = parse_content_ref(args.content_type, args.content_id)
    except ValueError as e:
        parser.error(str(e))

    with logfire.span("sweep_orphans", content=str(content)):
        removed = asyncio.run(sweep(settings, content))
        logfire.info("Orphan sweep finished", content=str(content), removed=removed)

    print(f"Removed {removed} orphaned replies from {content}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
