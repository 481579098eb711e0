"""Uploaded file record."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import EntityType, FileId, UserId


class Attachment(DomainModel):
    """File previously uploaded by a user.

    A file starts unassociated (``entity_id`` is None) and is bound to at
    most one entity for its whole life.
    """

    id: FileId
    uploader_id: UserId
    filename: str
    original_name: str
    file_path: str
    mime_type: str
    file_size: int = Field(ge=0)
    entity_type: Optional[EntityType] = None
    entity_id: Optional[UUID] = None
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_bound(self) -> bool:
        return self.entity_id is not None
