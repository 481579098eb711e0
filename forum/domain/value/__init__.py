"""Domain value objects for the forum."""

from forum.domain.value.identifiers import FileId, PostId, ReplyId, UserId
from forum.domain.value.types import (
    MAX_REPLY_LENGTH,
    Actor,
    EntityType,
    ReplyContent,
    Role,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "ReplyId",
    "FileId",
    # Types
    "MAX_REPLY_LENGTH",
    "Actor",
    "EntityType",
    "ReplyContent",
    "Role",
]
