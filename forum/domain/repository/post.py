"""Post repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from forum.domain.model import Post
from forum.domain.value import PostId, UserId


class PostRepository(ABC):
    """Repository for Post aggregate.

    Counter methods must be single atomic statements so that concurrent
    reply writes never lose updates.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def increment_reply_count(
        self, post_id: PostId, replied_at: datetime, replied_by: UserId
    ) -> None:
        """Atomically add one reply and record the latest reply activity.

        Args:
            post_id: The post ID
            replied_at: Creation time of the new reply
            replied_by: Author of the new reply
        """
        pass

    @abstractmethod
    async def decrement_reply_count(self, post_id: PostId) -> None:
        """Atomically remove one reply, never going below zero.

        Args:
            post_id: The post ID
        """
        pass

    @abstractmethod
    async def set_reply_count(self, post_id: PostId, count: int) -> Optional[Post]:
        """Overwrite the reply counter.

        Args:
            post_id: The post ID
            count: New counter value

        Returns:
            The updated post, or None if it does not exist
        """
        pass

    @abstractmethod
    async def set_locked(self, post_id: PostId, is_locked: bool) -> Optional[Post]:
        """Lock or unlock a post.

        Args:
            post_id: The post ID
            is_locked: New lock state

        Returns:
            The updated post, or None if it does not exist
        """
        pass
