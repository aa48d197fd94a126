"""initial_schema

Create the schema for WishYork comment threads:
- Users (profile snapshot source for comment authors)
- Contents (posts and wishlists with denormalized comment_count)
- Comments (two levels: top-level with reply_count, replies with parent_id)
- Comment reports (moderation queue)

Revision ID: 3c41d2e07b9a
Revises:
Create Date: 2026-10-18 10:12:44.512903

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c41d2e07b9a"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE content_type AS ENUM ('post', 'wishlist');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE report_status AS ENUM ('new', 'reviewed');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    content_type = postgresql.ENUM(
        "post", "wishlist", name="content_type", create_type=False
    )

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_users_username", "users", ["username"])

    # ========================================================================
    # CONTENTS table (posts and wishlists)
    # ========================================================================
    op.create_table(
        "contents",
        sa.Column("type", content_type, nullable=False),
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("type", "id", name="pk_contents"),
        sa.CheckConstraint("comment_count >= 0", name="comment_count_non_negative"),
    )

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    # No foreign key on parent_id: replies can briefly outlive their parent
    op.create_table(
        "comments",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("content_type", content_type, nullable=False),
        sa.Column("content_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("author_name", sa.String(100), nullable=False),
        sa.Column("author_username", sa.String(50), nullable=False),
        sa.Column("author_avatar_url", sa.Text(), nullable=True),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column(
            "kind", sa.String(16), nullable=False, server_default="top_level"
        ),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("parent_author_username", sa.String(50), nullable=True),
        sa.Column("reply_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("clock_timestamp()"),
        ),
        sa.ForeignKeyConstraint(
            ["content_type", "content_id"],
            ["contents.type", "contents.id"],
            ondelete="CASCADE",
            name="fk_comments_content",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "kind IN ('top_level', 'reply')", name="comment_kind_valid"
        ),
        sa.CheckConstraint(
            "(kind = 'reply') = (parent_id IS NOT NULL)", name="reply_has_parent"
        ),
        sa.CheckConstraint("reply_count >= 0", name="reply_count_non_negative"),
    )
    op.create_index(
        "idx_comments_content_created_at",
        "comments",
        ["content_type", "content_id", "created_at"],
    )
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])

    # ========================================================================
    # COMMENT_REPORTS table
    # ========================================================================
    op.create_table(
        "comment_reports",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("comment_id", sa.UUID(), nullable=False),
        sa.Column("content_type", content_type, nullable=False),
        sa.Column("content_id", sa.UUID(), nullable=False),
        sa.Column("reported_by", sa.UUID(), nullable=False),
        sa.Column("reason", sa.String(500), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM("new", "reviewed", name="report_status", create_type=False),
            nullable=False,
            server_default="new",
        ),
        sa.Column(
            "reported_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_comment_reports_comment_id", "comment_reports", ["comment_id"]
    )
    op.create_index("idx_comment_reports_status", "comment_reports", ["status"])


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("comment_reports")
    op.drop_table("comments")
    op.drop_table("contents")
    op.drop_table("users")

    # Drop ENUM types
    op.execute("DROP TYPE IF EXISTS report_status")
    op.execute("DROP TYPE IF EXISTS content_type")
