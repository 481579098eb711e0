"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import field_validator

from forum.domain.value.common import RootValueObject, ValueObject
from forum.domain.value.identifiers import UserId

MAX_REPLY_LENGTH = 5000


class Role(str, Enum):
    """Platform role of a user."""

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"

    @property
    def is_privileged(self) -> bool:
        """Moderators and admins bypass lock and ownership checks."""
        return self in (Role.MODERATOR, Role.ADMIN)


class EntityType(str, Enum):
    """Kind of entity an uploaded file can be bound to."""

    FORUM_REPLY = "forum_reply"
    FORUM_POST = "forum_post"


class ReplyContent(RootValueObject[str]):
    """Body text of a reply.

    Surrounding whitespace is stripped; the result must be 1-5000 characters.
    """

    @field_validator("root")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Validate content is non-blank and within the length limit."""
        v = v.strip()
        if not v:
            raise ValueError("Reply content cannot be empty")
        if len(v) > MAX_REPLY_LENGTH:
            raise ValueError(
                f"Reply content must be at most {MAX_REPLY_LENGTH} characters"
            )
        return v


class Actor(ValueObject):
    """The authenticated caller of an operation."""

    user_id: UserId
    role: Role = Role.USER

    @property
    def is_privileged(self) -> bool:
        return self.role.is_privileged

    def can_modify(self, owner_id: UserId) -> bool:
        """Whether the actor may edit or delete content owned by owner_id."""
        return self.user_id == owner_id or self.is_privileged
