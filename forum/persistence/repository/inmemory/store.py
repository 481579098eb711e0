"""Shared backing store for in-memory repositories."""

from dataclasses import dataclass, field

from forum.domain.model import Attachment, Post, Reply, User
from forum.domain.value import FileId, PostId, ReplyId, UserId


@dataclass
class InMemoryStore:
    """Tables held as dicts.

    One store is shared by every repository of a container, so data written
    through one request is visible to the next.
    """

    users: dict[UserId, User] = field(default_factory=dict)
    posts: dict[PostId, Post] = field(default_factory=dict)
    replies: dict[ReplyId, Reply] = field(default_factory=dict)
    attachments: dict[FileId, Attachment] = field(default_factory=dict)
