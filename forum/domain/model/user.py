"""User entity as seen by the discussion engine.

Accounts are owned by the authentication service; replies only need enough
of the user to display the author.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import Role, UserId


class User(DomainModel):
    """Registered user."""

    id: UserId
    username: str = Field(min_length=1, max_length=50)
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: Role = Role.USER
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.now)
