"""Attachment repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from forum.domain.model import Attachment
from forum.domain.value import EntityType, FileId, UserId


class AttachmentRepository(ABC):
    """Repository for uploaded file records."""

    @abstractmethod
    async def find_by_id(self, file_id: FileId) -> Optional[Attachment]:
        """Find a file record by ID.

        Args:
            file_id: The file's unique identifier

        Returns:
            The file record if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, attachment: Attachment) -> Attachment:
        """Save a file record (create or update).

        Args:
            attachment: The file record to save

        Returns:
            The saved record
        """
        pass

    @abstractmethod
    async def bind(
        self,
        file_id: FileId,
        uploader_id: UserId,
        entity_type: EntityType,
        entity_id: UUID,
    ) -> Optional[Attachment]:
        """Associate a file with an entity.

        The update only applies when the file was uploaded by ``uploader_id``
        and is not associated with anything yet.

        Args:
            file_id: The file ID
            uploader_id: Required uploader of the file
            entity_type: Kind of entity
            entity_id: Entity to bind to

        Returns:
            The bound record, or None if the conditions did not hold
        """
        pass

    @abstractmethod
    async def find_by_entities(
        self, entity_type: EntityType, entity_ids: list[UUID]
    ) -> list[Attachment]:
        """Find files bound to any of the given entities.

        Args:
            entity_type: Kind of entity
            entity_ids: Entity IDs

        Returns:
            Bound files ordered by creation time
        """
        pass
