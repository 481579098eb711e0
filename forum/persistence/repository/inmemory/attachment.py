"""In-memory attachment repository for testing."""

from typing import Optional
from uuid import UUID

from forum.domain.model import Attachment
from forum.domain.repository import AttachmentRepository
from forum.domain.value import EntityType, FileId, UserId

from .store import InMemoryStore


class InMemoryAttachmentRepository(AttachmentRepository):
    """In-memory implementation of AttachmentRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(self, file_id: FileId) -> Optional[Attachment]:
        """Find a file record by ID."""
        return self._store.attachments.get(file_id)

    async def save(self, attachment: Attachment) -> Attachment:
        """Save or update a file record."""
        self._store.attachments[attachment.id] = attachment
        return attachment

    async def bind(
        self,
        file_id: FileId,
        uploader_id: UserId,
        entity_type: EntityType,
        entity_id: UUID,
    ) -> Optional[Attachment]:
        """Bind an unassociated file owned by uploader_id."""
        attachment = self._store.attachments.get(file_id)
        if (
            attachment is None
            or attachment.uploader_id != uploader_id
            or attachment.is_bound
        ):
            return None
        bound = attachment.model_copy(
            update={"entity_type": entity_type, "entity_id": entity_id}
        )
        self._store.attachments[file_id] = bound
        return bound

    async def find_by_entities(
        self, entity_type: EntityType, entity_ids: list[UUID]
    ) -> list[Attachment]:
        """Find files bound to any of the given entities."""
        wanted = set(entity_ids)
        return sorted(
            (
                a
                for a in self._store.attachments.values()
                if a.entity_type == entity_type and a.entity_id in wanted
            ),
            key=lambda a: (a.created_at, a.id),
        )
