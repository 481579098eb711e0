"""Forum post aggregate root."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import PostId, UserId


class Post(DomainModel):
    """Forum post that owns a reply thread.

    ``reply_count``, ``last_reply_at`` and ``last_reply_by`` are denormalized
    aggregates maintained by atomic updates when replies are created or
    soft-deleted.
    """

    id: PostId
    title: str = Field(min_length=1, max_length=300)
    content: str = ""
    author_id: UserId
    reply_count: int = Field(default=0, ge=0)
    last_reply_at: Optional[datetime] = None
    last_reply_by: Optional[UserId] = None
    is_locked: bool = False
    is_pinned: bool = False
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
