"""Repository interfaces for the forum domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from forum.domain.repository.attachment import AttachmentRepository
from forum.domain.repository.post import PostRepository
from forum.domain.repository.reply import ReplyRepository
from forum.domain.repository.user import UserRepository

__all__ = [
    "AttachmentRepository",
    "PostRepository",
    "ReplyRepository",
    "UserRepository",
]
