"""Lock post use case."""

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase, parse_id
from forum.domain.error import ForbiddenError, NotFoundError
from forum.domain.service import PostService
from forum.domain.value import Actor, PostId

from .common import PostSummaryResponse


class LockPostRequest(BaseModel):
    """Lock post request."""

    post_id: str
    actor: Actor
    is_locked: bool = True


class LockPostUseCase(BaseUseCase):
    """Use case for moderators to lock or unlock a post.

    A locked post rejects new replies, edits and deletes from regular users.
    """

    def __init__(self, post_service: PostService) -> None:
        """Initialize lock post use case.

        Args:
            post_service: Post service
        """
        self.post_service = post_service

    async def execute(self, request: LockPostRequest) -> PostSummaryResponse:
        """Execute lock post flow.

        Raises:
            ValidationError: If the post ID is malformed
            ForbiddenError: If the caller is not a moderator or admin
            NotFoundError: If the post does not exist
        """
        post_id = parse_id(request.post_id, PostId, "post_id")

        if not request.actor.is_privileged:
            raise ForbiddenError("Only moderators can lock posts")

        post = await self.post_service.set_locked(post_id, request.is_locked)
        if post is None:
            raise NotFoundError("Post", request.post_id)

        return PostSummaryResponse.from_domain(post)
