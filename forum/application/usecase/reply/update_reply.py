"""Update reply use case."""

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase, parse_id
from forum.domain.error import NotFoundError
from forum.domain.service import AttachmentService, PostService, ReplyService
from forum.domain.value import Actor, ReplyId

from .common import ReplyResponse, ensure_can_modify


class UpdateReplyRequest(BaseModel):
    """Update reply request."""

    reply_id: str
    actor: Actor
    content: str


class UpdateReplyUseCase(BaseUseCase):
    """Use case for editing the content of a reply."""

    def __init__(
        self,
        reply_service: ReplyService,
        post_service: PostService,
        attachment_service: AttachmentService,
    ) -> None:
        """Initialize update reply use case.

        Args:
            reply_service: Reply service
            post_service: Post service
            attachment_service: Attachment service
        """
        self.reply_service = reply_service
        self.post_service = post_service
        self.attachment_service = attachment_service

    async def execute(self, request: UpdateReplyRequest) -> ReplyResponse:
        """Execute update reply flow.

        Args:
            request: Reply ID, caller and new content

        Returns:
            The edited reply

        Raises:
            ValidationError: If the ID or content is malformed
            NotFoundError: If the reply does not exist or was deleted
            ForbiddenError: If the caller may not edit it
        """
        reply_id = parse_id(request.reply_id, ReplyId, "reply_id")

        reply = await self.reply_service.get_reply_by_id(reply_id)
        if reply is None or not reply.is_active:
            raise NotFoundError("Reply", request.reply_id)

        post = await self.post_service.get_post_by_id(reply.post_id)
        if post is None:
            raise NotFoundError("Post", str(reply.post_id))

        ensure_can_modify(request.actor, reply, post)

        updated = await self.reply_service.update_content(reply_id, request.content)
        if updated is None:
            # Deleted between the read and the update
            raise NotFoundError("Reply", request.reply_id)

        with_author = await self.reply_service.get_reply_with_author(reply_id)
        files = await self.attachment_service.attachments_for_replies([reply_id])
        return ReplyResponse.from_domain(
            updated,
            with_author.author if with_author else None,
            files.get(reply_id, []),
        )
