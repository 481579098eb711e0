"""Reply domain service."""

from datetime import datetime
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from forum.domain.error import ValidationError
from forum.domain.model import Reply, ReplyWithAuthor
from forum.domain.repository import ReplyRepository
from forum.domain.value import PostId, ReplyContent, ReplyId, UserId

from .base import Service


def normalize_content(content: str) -> str:
    """Strip and validate reply content.

    Raises:
        ValidationError: If the content is blank or too long
    """
    try:
        return ReplyContent(content).root
    except PydanticValidationError as e:
        raise ValidationError(e.errors()[0]["msg"]) from e


class ReplyService(Service):
    """Domain service for reply lifecycle operations."""

    def __init__(self, reply_repository: ReplyRepository) -> None:
        """Initialize reply service.

        Args:
            reply_repository: Reply repository
        """
        self.reply_repository = reply_repository

    async def create_reply(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_id: ReplyId | None = None,
    ) -> Reply:
        """Persist a new active reply.

        Parent validation is the caller's job; nesting depth is not enforced
        here because threads are re-parented when read.

        Args:
            post_id: Post ID
            author_id: Author user ID
            content: Reply text
            parent_id: Reply being answered, if any

        Returns:
            The stored reply

        Raises:
            ValidationError: If the content is blank or too long
        """
        with logfire.span(
            "reply_service.create_reply",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            now = datetime.now()
            reply = Reply(
                id=ReplyId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                content=normalize_content(content),
                parent_id=parent_id,
                is_active=True,
                is_edited=False,
                created_at=now,
                updated_at=now,
            )

            saved = await self.reply_repository.save(reply)
            logfire.info(
                "Reply created",
                reply_id=str(saved.id),
                post_id=str(post_id),
                author_id=str(author_id),
            )
            return saved

    async def get_reply_by_id(self, reply_id: ReplyId) -> Reply | None:
        """Get a reply by ID, including soft-deleted ones.

        Args:
            reply_id: Reply ID

        Returns:
            Reply if found, None otherwise
        """
        with logfire.span("reply_service.get_reply_by_id", reply_id=str(reply_id)):
            reply = await self.reply_repository.find_by_id(reply_id)
            if reply:
                logfire.info("Reply found", reply_id=str(reply_id))
            else:
                logfire.warn("Reply not found", reply_id=str(reply_id))
            return reply

    async def get_reply_with_author(self, reply_id: ReplyId) -> ReplyWithAuthor | None:
        """Get a reply together with its author."""
        with logfire.span(
            "reply_service.get_reply_with_author", reply_id=str(reply_id)
        ):
            return await self.reply_repository.find_with_author(reply_id)

    async def get_thread_replies(self, post_id: PostId) -> list[ReplyWithAuthor]:
        """Get all active replies of a post with authors, in fetch order.

        Args:
            post_id: Post ID

        Returns:
            Reply/author pairs ordered by creation time
        """
        with logfire.span("reply_service.get_thread_replies", post_id=str(post_id)):
            entries = await self.reply_repository.find_active_by_post_with_authors(
                post_id
            )
            logfire.info(
                "Thread replies retrieved", post_id=str(post_id), count=len(entries)
            )
            return entries

    async def update_content(self, reply_id: ReplyId, content: str) -> Reply | None:
        """Replace the content of an active reply.

        Args:
            reply_id: Reply ID
            content: New content

        Returns:
            Updated reply, or None if it is missing or soft-deleted

        Raises:
            ValidationError: If the content is blank or too long
        """
        with logfire.span("reply_service.update_content", reply_id=str(reply_id)):
            updated = await self.reply_repository.update_content(
                reply_id, normalize_content(content)
            )
            if updated:
                logfire.info(
                    "Reply content updated",
                    reply_id=str(reply_id),
                    post_id=str(updated.post_id),
                    content_length=len(updated.content),
                )
            else:
                logfire.warn(
                    "Reply not found or inactive for update", reply_id=str(reply_id)
                )
            return updated

    async def soft_delete(self, reply_id: ReplyId) -> bool:
        """Mark a reply inactive.

        Args:
            reply_id: Reply ID

        Returns:
            True if this call deactivated the reply, False if it was already
            inactive or missing
        """
        with logfire.span("reply_service.soft_delete", reply_id=str(reply_id)):
            deactivated = await self.reply_repository.deactivate(reply_id)
            if deactivated:
                logfire.info("Reply soft-deleted", reply_id=str(reply_id))
            else:
                logfire.warn("Reply already inactive", reply_id=str(reply_id))
            return deactivated
