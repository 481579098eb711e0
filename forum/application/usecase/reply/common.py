"""Reply response models and guards shared by reply use cases."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from forum.domain.error import ForbiddenError
from forum.domain.model import Attachment, Post, Reply, User
from forum.domain.value import Actor

UNKNOWN_AUTHOR = "Unknown User"


class AuthorResponse(BaseModel):
    """Display fields of a reply author."""

    user_id: str | None
    username: str
    display_name: str | None = None
    avatar_url: str | None = None

    @classmethod
    def from_domain(cls, user: User | None) -> "AuthorResponse":
        """Build author fields, falling back to a placeholder for lost accounts."""
        if user is None:
            return cls(user_id=None, username=UNKNOWN_AUTHOR)
        return cls(
            user_id=str(user.id),
            username=user.username,
            display_name=user.display_name,
            avatar_url=user.avatar_url,
        )


class AttachmentResponse(BaseModel):
    """File bound to a reply."""

    file_id: str
    filename: str
    original_name: str
    file_path: str
    mime_type: str
    file_size: int

    @classmethod
    def from_domain(cls, attachment: Attachment) -> "AttachmentResponse":
        return cls(
            file_id=str(attachment.id),
            filename=attachment.filename,
            original_name=attachment.original_name,
            file_path=attachment.file_path,
            mime_type=attachment.mime_type,
            file_size=attachment.file_size,
        )


class ReplyResponse(BaseModel):
    """A single reply with author and files."""

    reply_id: str
    post_id: str
    parent_id: str | None
    content: str
    is_edited: bool
    created_at: datetime
    updated_at: datetime
    author: AuthorResponse
    attachments: list[AttachmentResponse] = []

    @classmethod
    def from_domain(
        cls,
        reply: Reply,
        author: User | None,
        attachments: list[Attachment] | None = None,
    ) -> "ReplyResponse":
        return cls(
            reply_id=str(reply.id),
            post_id=str(reply.post_id),
            parent_id=str(reply.parent_id) if reply.parent_id else None,
            content=reply.content,
            is_edited=reply.is_edited,
            created_at=reply.created_at,
            updated_at=reply.updated_at,
            author=AuthorResponse.from_domain(author),
            attachments=[AttachmentResponse.from_domain(a) for a in attachments or []],
        )


def ensure_can_modify(actor: Actor, reply: Reply, post: Post) -> None:
    """Check that the actor may edit or delete a reply.

    Authors may change their own replies while the post is unlocked;
    moderators and admins may change any reply at any time.

    Raises:
        ForbiddenError: If the actor is not allowed
    """
    if not actor.can_modify(reply.author_id):
        logfire.warn(
            "Reply modification by non-author rejected",
            reply_id=str(reply.id),
            user_id=str(actor.user_id),
        )
        raise ForbiddenError("You can only modify your own replies")

    if post.is_locked and not actor.is_privileged:
        logfire.warn(
            "Reply modification on locked post rejected",
            reply_id=str(reply.id),
            post_id=str(post.id),
            user_id=str(actor.user_id),
        )
        raise ForbiddenError("This post is locked")
