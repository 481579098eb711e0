"""PostgreSQL implementation of Attachment repository."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Attachment
from forum.domain.repository import AttachmentRepository
from forum.domain.value import EntityType, FileId, UserId
from forum.persistence.error import storage_errors
from forum.persistence.mappers import attachment_to_dict, row_to_attachment
from forum.persistence.tables import file_uploads_table


class PostgresAttachmentRepository(AttachmentRepository):
    """PostgreSQL implementation of AttachmentRepository over ``file_uploads``."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @storage_errors("attachment.find_by_id")
    async def find_by_id(self, file_id: FileId) -> Optional[Attachment]:
        """Find a file record by ID."""
        stmt = select(file_uploads_table).where(file_uploads_table.c.id == file_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_attachment(row._asdict()) if row else None

    @storage_errors("attachment.save")
    async def save(self, attachment: Attachment) -> Attachment:
        """Save a file record (create or update)."""
        existing = await self.find_by_id(attachment.id)
        values = attachment_to_dict(attachment)

        if existing:
            stmt = (
                file_uploads_table.update()
                .where(file_uploads_table.c.id == attachment.id)
                .values(**values)
            )
        else:
            stmt = file_uploads_table.insert().values(**values)

        await self.session.execute(stmt)
        await self.session.flush()
        return attachment

    @storage_errors("attachment.bind")
    async def bind(
        self,
        file_id: FileId,
        uploader_id: UserId,
        entity_type: EntityType,
        entity_id: UUID,
    ) -> Optional[Attachment]:
        """Bind an unassociated file owned by uploader_id.

        Runs inside a SAVEPOINT so a failed bind leaves the request
        transaction usable.
        """
        stmt = (
            update(file_uploads_table)
            .where(file_uploads_table.c.id == file_id)
            .where(file_uploads_table.c.user_id == uploader_id)
            .where(file_uploads_table.c.entity_id.is_(None))
            .values(entity_type=entity_type.value, entity_id=entity_id)
            .returning(file_uploads_table)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            row = result.fetchone()
        return row_to_attachment(row._asdict()) if row else None

    @storage_errors("attachment.find_by_entities")
    async def find_by_entities(
        self, entity_type: EntityType, entity_ids: list[UUID]
    ) -> list[Attachment]:
        """Find files bound to any of the given entities."""
        if not entity_ids:
            return []
        stmt = (
            select(file_uploads_table)
            .where(file_uploads_table.c.entity_type == entity_type.value)
            .where(file_uploads_table.c.entity_id.in_(entity_ids))
            .order_by(file_uploads_table.c.created_at, file_uploads_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_attachment(row._asdict()) for row in result.fetchall()]
