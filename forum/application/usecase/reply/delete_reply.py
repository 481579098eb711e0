"""Delete reply use case."""

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase, parse_id
from forum.domain.error import NotFoundError
from forum.domain.service import PostService, ReplyService
from forum.domain.value import Actor, ReplyId

from .common import ensure_can_modify


class DeleteReplyRequest(BaseModel):
    """Delete reply request."""

    reply_id: str
    actor: Actor


class DeleteReplyResponse(BaseModel):
    """Delete reply response."""

    reply_id: str
    post_id: str
    deleted: bool


class DeleteReplyUseCase(BaseUseCase):
    """Use case for soft-deleting a reply.

    Children of a deleted reply are kept; they surface as roots on the next
    read because their parent is no longer active.
    """

    def __init__(self, reply_service: ReplyService, post_service: PostService) -> None:
        """Initialize delete reply use case.

        Args:
            reply_service: Reply service
            post_service: Post service
        """
        self.reply_service = reply_service
        self.post_service = post_service

    async def execute(self, request: DeleteReplyRequest) -> DeleteReplyResponse:
        """Execute delete reply flow.

        The post counter is decremented only when this call is the one that
        deactivated the reply, so racing deletes count once.

        Args:
            request: Reply ID and caller

        Returns:
            Confirmation of the deletion

        Raises:
            ValidationError: If the ID is malformed
            NotFoundError: If the reply does not exist or was already deleted
            ForbiddenError: If the caller may not delete it
        """
        reply_id = parse_id(request.reply_id, ReplyId, "reply_id")

        reply = await self.reply_service.get_reply_by_id(reply_id)
        if reply is None or not reply.is_active:
            raise NotFoundError("Reply", request.reply_id)

        post = await self.post_service.get_post_by_id(reply.post_id)
        if post is None:
            raise NotFoundError("Post", str(reply.post_id))

        ensure_can_modify(request.actor, reply, post)

        if not await self.reply_service.soft_delete(reply_id):
            raise NotFoundError("Reply", request.reply_id)

        await self.post_service.record_reply_deleted(reply.post_id)

        return DeleteReplyResponse(
            reply_id=str(reply.id), post_id=str(reply.post_id), deleted=True
        )
