"""PostgreSQL repository implementations."""

from forum.persistence.repository.attachment import PostgresAttachmentRepository
from forum.persistence.repository.post import PostgresPostRepository
from forum.persistence.repository.reply import PostgresReplyRepository
from forum.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresAttachmentRepository",
    "PostgresPostRepository",
    "PostgresReplyRepository",
    "PostgresUserRepository",
]
