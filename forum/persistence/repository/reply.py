"""PostgreSQL implementation of Reply repository."""

from datetime import datetime
from typing import Optional

import logfire
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Reply, ReplyWithAuthor
from forum.domain.repository import ReplyRepository, UserRepository
from forum.domain.value import PostId, ReplyId
from forum.persistence.error import storage_errors
from forum.persistence.mappers import reply_to_dict, row_to_reply
from forum.persistence.tables import forum_replies_table


class PostgresReplyRepository(ReplyRepository):
    """PostgreSQL implementation of ReplyRepository."""

    def __init__(self, session: AsyncSession, user_repository: UserRepository) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            user_repository: Resolves authors with one batch query
        """
        self.session = session
        self.user_repository = user_repository

    @storage_errors("reply.find_by_id")
    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID."""
        stmt = select(forum_replies_table).where(forum_replies_table.c.id == reply_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_reply(row._asdict()) if row else None

    @storage_errors("reply.find_with_author")
    async def find_with_author(self, reply_id: ReplyId) -> Optional[ReplyWithAuthor]:
        """Find a reply together with its author."""
        reply = await self.find_by_id(reply_id)
        if reply is None:
            return None
        return ReplyWithAuthor(
            reply=reply, author=await self.user_repository.find_by_id(reply.author_id)
        )

    @storage_errors("reply.find_active_by_post_with_authors")
    async def find_active_by_post_with_authors(
        self, post_id: PostId
    ) -> list[ReplyWithAuthor]:
        """Fetch active replies of a post, then their authors in one batch."""
        with logfire.span(
            "reply_repository.find_active_by_post_with_authors", post_id=str(post_id)
        ):
            stmt = (
                select(forum_replies_table)
                .where(forum_replies_table.c.post_id == post_id)
                .where(forum_replies_table.c.is_active.is_(True))
                .order_by(forum_replies_table.c.created_at, forum_replies_table.c.id)
            )
            result = await self.session.execute(stmt)
            replies = [row_to_reply(row._asdict()) for row in result.fetchall()]

            authors = await self.user_repository.find_by_ids(
                [r.author_id for r in replies]
            )
            entries = [
                ReplyWithAuthor(reply=reply, author=authors.get(reply.author_id))
                for reply in replies
            ]
            logfire.debug(
                "Fetched thread replies",
                post_id=str(post_id),
                replies=len(entries),
                authors=len(authors),
            )
            return entries

    @storage_errors("reply.save")
    async def save(self, reply: Reply) -> Reply:
        """Insert a new reply."""
        stmt = (
            forum_replies_table.insert()
            .values(**reply_to_dict(reply))
            .returning(forum_replies_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_reply(row._asdict()) if row else reply

    @storage_errors("reply.update_content")
    async def update_content(self, reply_id: ReplyId, content: str) -> Optional[Reply]:
        """Replace content of an active reply."""
        stmt = (
            update(forum_replies_table)
            .where(forum_replies_table.c.id == reply_id)
            .where(forum_replies_table.c.is_active.is_(True))
            .values(content=content, is_edited=True, updated_at=datetime.now())
            .returning(forum_replies_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            return None

        await self.session.flush()
        return row_to_reply(row._asdict())

    @storage_errors("reply.deactivate")
    async def deactivate(self, reply_id: ReplyId) -> bool:
        """Flip an active reply to inactive; report whether a row changed."""
        stmt = (
            update(forum_replies_table)
            .where(forum_replies_table.c.id == reply_id)
            .where(forum_replies_table.c.is_active.is_(True))
            .values(is_active=False, updated_at=datetime.now())
            .returning(forum_replies_table.c.id)
        )
        result = await self.session.execute(stmt)
        changed = result.fetchone() is not None
        await self.session.flush()
        return changed

    @storage_errors("reply.count_active_by_post")
    async def count_active_by_post(self, post_id: PostId) -> int:
        """Count active replies of a post."""
        stmt = (
            select(func.count())
            .select_from(forum_replies_table)
            .where(forum_replies_table.c.post_id == post_id)
            .where(forum_replies_table.c.is_active.is_(True))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
