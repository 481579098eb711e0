"""Reply repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from forum.domain.model import Reply, ReplyWithAuthor
from forum.domain.value import PostId, ReplyId


class ReplyRepository(ABC):
    """Repository for Reply entity.

    Defines the contract for reply persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID, active or not.

        Args:
            reply_id: The reply's unique identifier

        Returns:
            The reply if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_with_author(self, reply_id: ReplyId) -> Optional[ReplyWithAuthor]:
        """Find a reply together with its author.

        Args:
            reply_id: The reply's unique identifier

        Returns:
            The reply and author if the reply exists, None otherwise
        """
        pass

    @abstractmethod
    async def find_active_by_post_with_authors(
        self, post_id: PostId
    ) -> list[ReplyWithAuthor]:
        """Fetch every active reply of a post with its author.

        Replies are ordered by ``created_at`` then ``id``. Authors are loaded
        with a single batch lookup, never one query per reply.

        Args:
            post_id: The post ID

        Returns:
            Reply/author pairs in fetch order
        """
        pass

    @abstractmethod
    async def save(self, reply: Reply) -> Reply:
        """Insert a new reply.

        Args:
            reply: The reply to insert

        Returns:
            The stored reply
        """
        pass

    @abstractmethod
    async def update_content(self, reply_id: ReplyId, content: str) -> Optional[Reply]:
        """Replace the content of an active reply and mark it edited.

        Args:
            reply_id: The reply ID
            content: New content

        Returns:
            The updated reply, or None if missing or inactive
        """
        pass

    @abstractmethod
    async def deactivate(self, reply_id: ReplyId) -> bool:
        """Soft-delete a reply if it is still active.

        Args:
            reply_id: The reply ID

        Returns:
            True if this call flipped the reply to inactive
        """
        pass

    @abstractmethod
    async def count_active_by_post(self, post_id: PostId) -> int:
        """Count active replies of a post.

        Args:
            post_id: The post ID

        Returns:
            Number of active replies
        """
        pass
