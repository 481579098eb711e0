"""In-memory repository implementations for testing."""

from .attachment import InMemoryAttachmentRepository
from .post import InMemoryPostRepository
from .reply import InMemoryReplyRepository
from .store import InMemoryStore
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryAttachmentRepository",
    "InMemoryPostRepository",
    "InMemoryReplyRepository",
    "InMemoryStore",
    "InMemoryUserRepository",
]
