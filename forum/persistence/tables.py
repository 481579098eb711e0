"""SQLAlchemy table definitions for the forum.

These definitions mirror the schema created by the Alembic migrations and
are used with SQLAlchemy Core; domain models are mapped by hand in
``mappers.py``.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# USERS TABLE (owned by the account service, read here for authors)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("username", String(50), nullable=False, unique=True),
    Column("display_name", String(100), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column("role", String(20), nullable=False, server_default="user"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# FORUM POSTS TABLE
# ============================================================================
forum_posts_table = Table(
    "forum_posts",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("title", String(300), nullable=False),
    Column("content", Text, nullable=False, server_default=""),
    Column(
        "author_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("reply_count", Integer, nullable=False, server_default="0"),
    Column("last_reply_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "last_reply_by",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("is_locked", Boolean, nullable=False, server_default="false"),
    Column("is_pinned", Boolean, nullable=False, server_default="false"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("reply_count >= 0", name="reply_count_non_negative"),
)

Index("idx_forum_posts_author_id", forum_posts_table.c.author_id)

# ============================================================================
# FORUM REPLIES TABLE
# ============================================================================
forum_replies_table = Table(
    "forum_replies",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "post_id",
        UUID(as_uuid=True),
        ForeignKey("forum_posts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    # No foreign key: parents may be soft-deleted and are resolved on read
    Column("parent_id", UUID(as_uuid=True), nullable=True),
    Column(
        "author_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("content", Text, nullable=False),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_forum_replies_post_created",
    forum_replies_table.c.post_id,
    forum_replies_table.c.created_at,
)
Index("idx_forum_replies_author_id", forum_replies_table.c.author_id)

# ============================================================================
# FILE UPLOADS TABLE (written by the upload service)
# ============================================================================
file_uploads_table = Table(
    "file_uploads",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("filename", String(255), nullable=False),
    Column("original_name", String(255), nullable=False),
    Column("file_path", Text, nullable=False),
    Column("file_size", Integer, nullable=False),
    Column("mime_type", String(100), nullable=False),
    Column("entity_type", String(50), nullable=True),
    Column("entity_id", UUID(as_uuid=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_file_uploads_entity",
    file_uploads_table.c.entity_type,
    file_uploads_table.c.entity_id,
)
Index("idx_file_uploads_user_id", file_uploads_table.c.user_id)
