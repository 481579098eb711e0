"""Post use cases."""

from .common import PostSummaryResponse
from .lock_post import LockPostRequest, LockPostUseCase
from .recount_replies import RecountRepliesRequest, RecountRepliesUseCase

__all__ = [
    "LockPostRequest",
    "LockPostUseCase",
    "PostSummaryResponse",
    "RecountRepliesRequest",
    "RecountRepliesUseCase",
]
