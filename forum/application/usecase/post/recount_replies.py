"""Recount replies use case."""

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase, parse_id
from forum.domain.error import ForbiddenError, NotFoundError
from forum.domain.service import PostService
from forum.domain.value import Actor, PostId

from .common import PostSummaryResponse


class RecountRepliesRequest(BaseModel):
    """Recount replies request."""

    post_id: str
    actor: Actor


class RecountRepliesUseCase(BaseUseCase):
    """Use case for repairing a post's reply counter.

    Counter updates that failed after a reply was written leave drift;
    this resets the counter from the active replies.
    """

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: RecountRepliesRequest) -> PostSummaryResponse:
        """Execute recount flow.

        Raises:
            ValidationError: If the post ID is malformed
            ForbiddenError: If the caller is not a moderator or admin
            NotFoundError: If the post does not exist
        """
        post_id = parse_id(request.post_id, PostId, "post_id")

        if not request.actor.is_privileged:
            raise ForbiddenError("Only moderators can recount replies")

        post = await self.post_service.recount_replies(post_id)
        if post is None:
            raise NotFoundError("Post", request.post_id)

        return PostSummaryResponse.from_domain(post)
