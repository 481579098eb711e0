"""In-memory post repository for testing."""

from datetime import datetime
from typing import Optional

from forum.domain.model import Post
from forum.domain.repository import PostRepository
from forum.domain.value import PostId, UserId

from .store import InMemoryStore


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._store.posts.get(post_id)

    async def save(self, post: Post) -> Post:
        """Save or update a post."""
        self._store.posts[post.id] = post
        return post

    async def increment_reply_count(
        self, post_id: PostId, replied_at: datetime, replied_by: UserId
    ) -> None:
        """Increment reply_count and record the latest reply."""
        post = self._store.posts.get(post_id)
        if post:
            self._store.posts[post_id] = post.model_copy(
                update={
                    "reply_count": post.reply_count + 1,
                    "last_reply_at": replied_at,
                    "last_reply_by": replied_by,
                }
            )

    async def decrement_reply_count(self, post_id: PostId) -> None:
        """Decrement reply_count (minimum 0)."""
        post = self._store.posts.get(post_id)
        if post and post.reply_count > 0:
            self._store.posts[post_id] = post.model_copy(
                update={"reply_count": post.reply_count - 1}
            )

    async def set_reply_count(self, post_id: PostId, count: int) -> Optional[Post]:
        """Overwrite reply_count."""
        post = self._store.posts.get(post_id)
        if post is None:
            return None
        updated = post.model_copy(update={"reply_count": max(count, 0)})
        self._store.posts[post_id] = updated
        return updated

    async def set_locked(self, post_id: PostId, is_locked: bool) -> Optional[Post]:
        """Set the lock flag."""
        post = self._store.posts.get(post_id)
        if post is None:
            return None
        updated = post.model_copy(
            update={"is_locked": is_locked, "updated_at": datetime.now()}
        )
        self._store.posts[post_id] = updated
        return updated
