"""Reply entity.

Replies are stored flat with a parent pointer. Nesting is reconstructed on
every read, so depth is never persisted.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import MAX_REPLY_LENGTH, PostId, ReplyId, UserId


class Reply(DomainModel):
    """A reply to a forum post, optionally answering another reply.

    ``parent_id`` is whatever the author targeted at write time. It may later
    dangle (parent soft-deleted) and is resolved leniently when threads are
    built.
    """

    id: ReplyId
    post_id: PostId
    author_id: UserId
    content: str = Field(min_length=1, max_length=MAX_REPLY_LENGTH)
    parent_id: Optional[ReplyId] = None
    is_active: bool = True
    is_edited: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
