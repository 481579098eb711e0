"""Attachment binding domain service."""

from collections import defaultdict

import logfire

from forum.domain.error import StorageError
from forum.domain.model import Attachment, Reply
from forum.domain.repository import AttachmentRepository
from forum.domain.value import EntityType, FileId, ReplyId

from .base import Service


class AttachmentService(Service):
    """Domain service that links uploaded files to replies."""

    def __init__(self, attachment_repository: AttachmentRepository) -> None:
        """Initialize attachment service.

        Args:
            attachment_repository: Attachment repository
        """
        self.attachment_repository = attachment_repository

    async def bind_to_reply(
        self, file_ids: list[FileId], reply: Reply
    ) -> list[Attachment]:
        """Bind uploaded files to a freshly created reply.

        Binding is best effort. A file is bound only if the reply author
        uploaded it and it is not attached to anything yet; other ids are
        skipped. A storage failure stops binding and is logged, never raised,
        since the reply itself already exists.

        Args:
            file_ids: Requested file IDs, duplicates allowed
            reply: Reply to bind to

        Returns:
            Files that were bound by this call
        """
        with logfire.span(
            "attachment_service.bind_to_reply",
            reply_id=str(reply.id),
            requested=len(file_ids),
        ):
            bound: list[Attachment] = []
            for file_id in dict.fromkeys(file_ids):
                try:
                    attachment = await self.attachment_repository.bind(
                        file_id,
                        uploader_id=reply.author_id,
                        entity_type=EntityType.FORUM_REPLY,
                        entity_id=reply.id,
                    )
                except StorageError as e:
                    logfire.error(
                        "Attachment binding failed",
                        reply_id=str(reply.id),
                        file_id=str(file_id),
                        error=str(e),
                    )
                    break

                if attachment is None:
                    logfire.warn(
                        "Attachment skipped",
                        reply_id=str(reply.id),
                        file_id=str(file_id),
                    )
                    continue
                bound.append(attachment)

            logfire.info(
                "Attachments bound",
                reply_id=str(reply.id),
                bound=len(bound),
                skipped=len(set(file_ids)) - len(bound),
            )
            return bound

    async def attachments_for_replies(
        self, reply_ids: list[ReplyId]
    ) -> dict[ReplyId, list[Attachment]]:
        """Group the files bound to each reply.

        Args:
            reply_ids: Reply IDs

        Returns:
            Mapping of reply ID to its files; replies without files are absent
        """
        if not reply_ids:
            return {}

        with logfire.span(
            "attachment_service.attachments_for_replies", count=len(reply_ids)
        ):
            attachments = await self.attachment_repository.find_by_entities(
                EntityType.FORUM_REPLY, list(reply_ids)
            )
            grouped: dict[ReplyId, list[Attachment]] = defaultdict(list)
            for attachment in attachments:
                grouped[ReplyId(attachment.entity_id)].append(attachment)
            return dict(grouped)
