"""PostgreSQL implementation of Post repository."""

from datetime import datetime
from typing import Optional

import logfire
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Post
from forum.domain.repository import PostRepository
from forum.domain.value import PostId, UserId
from forum.persistence.error import storage_errors
from forum.persistence.mappers import post_to_dict, row_to_post
from forum.persistence.tables import forum_posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository.

    Counter updates run inside a SAVEPOINT so that a failed update can be
    tolerated without aborting the surrounding request transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @storage_errors("post.find_by_id")
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(forum_posts_table).where(forum_posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_post(row._asdict()) if row else None

    @storage_errors("post.save")
    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        existing = await self.find_by_id(post.id)
        post_dict = post_to_dict(post)

        if existing:
            stmt = (
                forum_posts_table.update()
                .where(forum_posts_table.c.id == post.id)
                .values(**post_dict)
            )
        else:
            stmt = forum_posts_table.insert().values(**post_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return post

    @storage_errors("post.increment_reply_count")
    async def increment_reply_count(
        self, post_id: PostId, replied_at: datetime, replied_by: UserId
    ) -> None:
        """Atomically increment reply_count and record the latest reply."""
        stmt = (
            update(forum_posts_table)
            .where(forum_posts_table.c.id == post_id)
            .values(
                reply_count=forum_posts_table.c.reply_count + 1,
                last_reply_at=replied_at,
                last_reply_by=replied_by,
            )
        )
        async with self.session.begin_nested():
            await self.session.execute(stmt)

    @storage_errors("post.decrement_reply_count")
    async def decrement_reply_count(self, post_id: PostId) -> None:
        """Atomically decrement reply_count (minimum 0)."""
        stmt = (
            update(forum_posts_table)
            .where(forum_posts_table.c.id == post_id)
            .where(forum_posts_table.c.reply_count > 0)  # Don't go below 0
            .values(reply_count=forum_posts_table.c.reply_count - 1)
        )
        async with self.session.begin_nested():
            await self.session.execute(stmt)

    @storage_errors("post.set_reply_count")
    async def set_reply_count(self, post_id: PostId, count: int) -> Optional[Post]:
        """Overwrite reply_count."""
        stmt = (
            update(forum_posts_table)
            .where(forum_posts_table.c.id == post_id)
            .values(reply_count=max(count, 0))
            .returning(forum_posts_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_post(row._asdict()) if row else None

    @storage_errors("post.set_locked")
    async def set_locked(self, post_id: PostId, is_locked: bool) -> Optional[Post]:
        """Set the lock flag."""
        stmt = (
            update(forum_posts_table)
            .where(forum_posts_table.c.id == post_id)
            .values(is_locked=is_locked, updated_at=datetime.now())
            .returning(forum_posts_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_post(row._asdict()) if row else None
