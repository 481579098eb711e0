"""Domain model entities for the forum."""

from forum.domain.model.attachment import Attachment
from forum.domain.model.post import Post
from forum.domain.model.reply import Reply
from forum.domain.model.reply_with_author import ReplyWithAuthor
from forum.domain.model.user import User

__all__ = [
    "Attachment",
    "Post",
    "Reply",
    "ReplyWithAuthor",
    "User",
]
