"""Post response model shared by post use cases."""

from datetime import datetime

from pydantic import BaseModel

from forum.domain.model import Post


class PostSummaryResponse(BaseModel):
    """Post fields shown above a reply thread."""

    post_id: str
    title: str
    author_id: str
    reply_count: int
    last_reply_at: datetime | None
    last_reply_by: str | None
    is_locked: bool
    is_pinned: bool
    created_at: datetime

    @classmethod
    def from_domain(cls, post: Post) -> "PostSummaryResponse":
        return cls(
            post_id=str(post.id),
            title=post.title,
            author_id=str(post.author_id),
            reply_count=post.reply_count,
            last_reply_at=post.last_reply_at,
            last_reply_by=str(post.last_reply_by) if post.last_reply_by else None,
            is_locked=post.is_locked,
            is_pinned=post.is_pinned,
            created_at=post.created_at,
        )
