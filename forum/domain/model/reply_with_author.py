"""Reply paired with its author."""

from typing import Optional

from forum.domain.model.common import DomainModel
from forum.domain.model.reply import Reply
from forum.domain.model.user import User


class ReplyWithAuthor(DomainModel):
    """A reply and the user who wrote it.

    ``author`` is None when the account no longer exists.
    """

    reply: Reply
    author: Optional[User] = None
