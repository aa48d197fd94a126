"""SQLAlchemy table definitions for WishYork comments.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKeyConstraint,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

content_type_enum = postgresql.ENUM(
    "post", "wishlist", name="content_type", create_type=False
)

# ============================================================================
# USERS TABLE (profiles written by the wider application)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("name", String(100), nullable=False),
    Column("username", String(50), nullable=False),
    Column("avatar_url", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_username", users_table.c.username)

# ============================================================================
# CONTENTS TABLE (posts and wishlists)
# ============================================================================
contents_table = Table(
    "contents",
    metadata,
    Column("type", content_type_enum, nullable=False),
    Column("id", UUID, nullable=False),
    Column("author_id", UUID, nullable=False),
    Column("title", String(300), nullable=False),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("type", "id", name="pk_contents"),
    CheckConstraint("comment_count >= 0", name="comment_count_non_negative"),
)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
# parent_id has no foreign key: a reply may outlive its parent for as long
# as a cascading delete races with a new reply.
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("content_type", content_type_enum, nullable=False),
    Column("content_id", UUID, nullable=False),
    Column("author_id", UUID, nullable=False),
    Column("author_name", String(100), nullable=False),  # Snapshot at creation
    Column("author_username", String(50), nullable=False),  # Snapshot at creation
    Column("author_avatar_url", Text, nullable=True),  # Snapshot at creation
    Column("text", Text, nullable=False),
    Column("kind", String(16), nullable=False, server_default="top_level"),
    Column("parent_id", UUID, nullable=True),
    Column("parent_author_username", String(50), nullable=True),
    Column("reply_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("clock_timestamp()"),
    ),
    ForeignKeyConstraint(
        ["content_type", "content_id"],
        ["contents.type", "contents.id"],
        ondelete="CASCADE",
        name="fk_comments_content",
    ),
    CheckConstraint("kind IN ('top_level', 'reply')", name="comment_kind_valid"),
    CheckConstraint(
        "(kind = 'reply') = (parent_id IS NOT NULL)", name="reply_has_parent"
    ),
    CheckConstraint("reply_count >= 0", name="reply_count_non_negative"),
)

Index(
    "idx_comments_content_created_at",
    comments_table.c.content_type,
    comments_table.c.content_id,
    comments_table.c.created_at,
)
Index("idx_comments_parent_id", comments_table.c.parent_id)

# ============================================================================
# COMMENT REPORTS TABLE
# ============================================================================
comment_reports_table = Table(
    "comment_reports",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("comment_id", UUID, nullable=False),  # Kept after the comment is deleted
    Column("content_type", content_type_enum, nullable=False),
    Column("content_id", UUID, nullable=False),
    Column("reported_by", UUID, nullable=False),
    Column("reason", String(500), nullable=False),
    Column(
        "status",
        postgresql.ENUM("new", "reviewed", name="report_status", create_type=False),
        nullable=False,
        server_default="new",
    ),
    Column(
        "reported_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comment_reports_comment_id", comment_reports_table.c.comment_id)
Index("idx_comment_reports_status", comment_reports_table.c.status)
