"""Create reply use case."""

import logfire
from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase, parse_id
from forum.domain.error import ForbiddenError, NotFoundError
from forum.domain.service import AttachmentService, PostService, ReplyService
from forum.domain.value import Actor, FileId, PostId, ReplyId

from .common import ReplyResponse


class CreateReplyRequest(BaseModel):
    """Create reply request."""

    post_id: str
    actor: Actor
    content: str
    parent_id: str | None = None
    attachment_ids: list[str] = []


class CreateReplyUseCase(BaseUseCase):
    """Use case for replying to a post or to another reply."""

    def __init__(
        self,
        reply_service: ReplyService,
        post_service: PostService,
        attachment_service: AttachmentService,
    ) -> None:
        """Initialize create reply use case.

        Args:
            reply_service: Reply service
            post_service: Post service
            attachment_service: Attachment service
        """
        self.reply_service = reply_service
        self.post_service = post_service
        self.attachment_service = attachment_service

    async def execute(self, request: CreateReplyRequest) -> ReplyResponse:
        """Execute create reply flow.

        Steps:
        1. Check the post accepts replies from this caller
        2. Check the targeted parent is an active reply of the same post
        3. Store the reply
        4. Update the post's reply counter (failure tolerated)
        5. Bind requested uploads (best effort)

        Args:
            request: Reply content, optional parent and uploads

        Returns:
            The created reply with author and bound files

        Raises:
            ValidationError: If IDs or content are malformed
            NotFoundError: If the post or parent reply does not exist
            ForbiddenError: If the post is inactive, or locked for this caller
        """
        post_id = parse_id(request.post_id, PostId, "post_id")
        parent_id = (
            parse_id(request.parent_id, ReplyId, "parent_id")
            if request.parent_id
            else None
        )
        file_ids = [parse_id(f, FileId, "attachment_id") for f in request.attachment_ids]
        actor = request.actor

        post = await self.post_service.get_post_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", request.post_id)
        if not post.is_active:
            raise ForbiddenError("Cannot reply to an inactive post")
        if post.is_locked and not actor.is_privileged:
            logfire.warn(
                "Reply to locked post rejected",
                post_id=str(post_id),
                user_id=str(actor.user_id),
            )
            raise ForbiddenError("This post is locked")

        if parent_id is not None:
            parent = await self.reply_service.get_reply_by_id(parent_id)
            if parent is None or not parent.is_active or parent.post_id != post_id:
                raise NotFoundError("Parent reply", request.parent_id)

        reply = await self.reply_service.create_reply(
            post_id=post_id,
            author_id=actor.user_id,
            content=request.content,
            parent_id=parent_id,
        )

        await self.post_service.record_reply_created(
            post_id, reply.created_at, actor.user_id
        )

        attachments = []
        if file_ids:
            attachments = await self.attachment_service.bind_to_reply(file_ids, reply)

        created = await self.reply_service.get_reply_with_author(reply.id)
        author = created.author if created else None
        return ReplyResponse.from_domain(reply, author, attachments)
