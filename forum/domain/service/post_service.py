"""Post domain service."""

from datetime import datetime

import logfire

from forum.domain.error import StorageError
from forum.domain.model.post import Post
from forum.domain.repository import PostRepository, ReplyRepository
from forum.domain.value import PostId, UserId

from .base import Service


class PostService(Service):
    """Domain service for post state and its reply aggregates."""

    def __init__(
        self, post_repository: PostRepository, reply_repository: ReplyRepository
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            reply_repository: Reply repository, used for recounts
        """
        self.post_repository = post_repository
        self.reply_repository = reply_repository

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id), title=post.title)
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def record_reply_created(
        self, post_id: PostId, replied_at: datetime, replied_by: UserId
    ) -> bool:
        """Count a new reply against its post.

        The reply row is already written when this runs, so a failing
        counter update is logged and reported instead of raised. A later
        recount repairs the drift.

        Args:
            post_id: Post ID
            replied_at: Creation time of the reply
            replied_by: Author of the reply

        Returns:
            True if the counter was updated
        """
        with logfire.span(
            "post_service.record_reply_created",
            post_id=str(post_id),
            replied_by=str(replied_by),
        ):
            try:
                await self.post_repository.increment_reply_count(
                    post_id, replied_at, replied_by
                )
            except StorageError as e:
                logfire.error(
                    "Reply counter increment failed",
                    post_id=str(post_id),
                    error=str(e),
                )
                return False

            logfire.info("Reply counter incremented", post_id=str(post_id))
            return True

    async def record_reply_deleted(self, post_id: PostId) -> bool:
        """Remove a soft-deleted reply from its post's counter.

        The counter never drops below zero. Failures are logged and
        reported, not raised.

        Args:
            post_id: Post ID

        Returns:
            True if the counter update ran
        """
        with logfire.span("post_service.record_reply_deleted", post_id=str(post_id)):
            try:
                await self.post_repository.decrement_reply_count(post_id)
            except StorageError as e:
                logfire.error(
                    "Reply counter decrement failed",
                    post_id=str(post_id),
                    error=str(e),
                )
                return False

            logfire.info("Reply counter decremented", post_id=str(post_id))
            return True

    async def recount_replies(self, post_id: PostId) -> Post | None:
        """Reset the reply counter from the number of active replies.

        Args:
            post_id: Post ID

        Returns:
            Updated post, or None if it does not exist
        """
        with logfire.span("post_service.recount_replies", post_id=str(post_id)):
            count = await self.reply_repository.count_active_by_post(post_id)
            post = await self.post_repository.set_reply_count(post_id, count)
            if post:
                logfire.info(
                    "Reply counter recounted", post_id=str(post_id), reply_count=count
                )
            else:
                logfire.warn("Post not found for recount", post_id=str(post_id))
            return post

    async def set_locked(self, post_id: PostId, is_locked: bool) -> Post | None:
        """Lock or unlock a post for replies.

        Args:
            post_id: Post ID
            is_locked: New lock state

        Returns:
            Updated post, or None if it does not exist
        """
        with logfire.span(
            "post_service.set_locked", post_id=str(post_id), is_locked=is_locked
        ):
            post = await self.post_repository.set_locked(post_id, is_locked)
            if post:
                logfire.info(
                    "Post lock state changed", post_id=str(post_id), is_locked=is_locked
                )
            else:
                logfire.warn("Post not found for lock change", post_id=str(post_id))
            return post
