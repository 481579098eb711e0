"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from forum.domain.model import User
from forum.domain.value import UserId


class UserRepository(ABC):
    """Read access to user accounts."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: list[UserId]) -> dict[UserId, User]:
        """Find many users in one lookup.

        Args:
            user_ids: User IDs, duplicates allowed

        Returns:
            Mapping of found user ID to user; unknown IDs are absent
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass
