"""In-memory reply repository for testing."""

from datetime import datetime
from typing import Optional

from forum.domain.model import Reply, ReplyWithAuthor
from forum.domain.repository import ReplyRepository, UserRepository
from forum.domain.value import PostId, ReplyId

from .store import InMemoryStore
from .user import InMemoryUserRepository


class InMemoryReplyRepository(ReplyRepository):
    """In-memory implementation of ReplyRepository for testing.

    Authors are resolved through the user repository's batch lookup, the
    same way the PostgreSQL implementation issues a single IN query.
    """

    def __init__(
        self,
        store: InMemoryStore | None = None,
        user_repository: UserRepository | None = None,
    ) -> None:
        self._store = store or InMemoryStore()
        self._users = user_repository or InMemoryUserRepository(self._store)

    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID."""
        return self._store.replies.get(reply_id)

    async def find_with_author(self, reply_id: ReplyId) -> Optional[ReplyWithAuthor]:
        """Find a reply with its author."""
        reply = self._store.replies.get(reply_id)
        if reply is None:
            return None
        return ReplyWithAuthor(
            reply=reply, author=await self._users.find_by_id(reply.author_id)
        )

    async def find_active_by_post_with_authors(
        self, post_id: PostId
    ) -> list[ReplyWithAuthor]:
        """Active replies of a post ordered by created_at, then id."""
        replies = sorted(
            (
                r
                for r in self._store.replies.values()
                if r.post_id == post_id and r.is_active
            ),
            key=lambda r: (r.created_at, r.id),
        )
        authors = await self._users.find_by_ids([r.author_id for r in replies])
        return [
            ReplyWithAuthor(reply=r, author=authors.get(r.author_id)) for r in replies
        ]

    async def save(self, reply: Reply) -> Reply:
        """Store a reply."""
        self._store.replies[reply.id] = reply
        return reply

    async def update_content(self, reply_id: ReplyId, content: str) -> Optional[Reply]:
        """Replace content of an active reply."""
        reply = self._store.replies.get(reply_id)
        if reply is None or not reply.is_active:
            return None
        updated = reply.model_copy(
            update={
                "content": content,
                "is_edited": True,
                "updated_at": datetime.now(),
            }
        )
        self._store.replies[reply_id] = updated
        return updated

    async def deactivate(self, reply_id: ReplyId) -> bool:
        """Soft-delete an active reply."""
        reply = self._store.replies.get(reply_id)
        if reply is None or not reply.is_active:
            return False
        self._store.replies[reply_id] = reply.model_copy(
            update={"is_active": False, "updated_at": datetime.now()}
        )
        return True

    async def count_active_by_post(self, post_id: PostId) -> int:
        """Count active replies of a post."""
        return sum(
            1
            for r in self._store.replies.values()
            if r.post_id == post_id and r.is_active
        )
