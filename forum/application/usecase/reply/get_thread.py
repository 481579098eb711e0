"""Get reply thread use case."""

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase, parse_id
from forum.application.usecase.post.common import PostSummaryResponse
from forum.domain.error import NotFoundError
from forum.domain.service import Pagination, PostService, ReplyNode, ThreadService
from forum.domain.value import PostId

from .common import AttachmentResponse, AuthorResponse, ReplyResponse


class ReplyNodeResponse(ReplyResponse):
    """Reply in a thread, with its nested replies.

    Recursive structure mirroring the domain tree.
    """

    depth: int
    children: list["ReplyNodeResponse"]

    @classmethod
    def from_node(cls, node: ReplyNode) -> "ReplyNodeResponse":
        """Convert a domain node and its subtree to response models."""
        reply = node.reply
        return cls(
            reply_id=str(reply.id),
            post_id=str(reply.post_id),
            parent_id=str(reply.parent_id) if reply.parent_id else None,
            content=reply.content,
            is_edited=reply.is_edited,
            created_at=reply.created_at,
            updated_at=reply.updated_at,
            author=AuthorResponse.from_domain(node.author),
            attachments=[AttachmentResponse.from_domain(a) for a in node.attachments],
            depth=node.depth,
            children=[cls.from_node(child) for child in node.children],
        )


class GetThreadRequest(BaseModel):
    """Get thread request."""

    post_id: str
    page: int = 1
    limit: int = 20


class GetThreadResponse(BaseModel):
    """Get thread response."""

    post: PostSummaryResponse
    replies: list[ReplyNodeResponse]
    pagination: Pagination


class GetThreadUseCase(BaseUseCase):
    """Use case for reading a post's reply thread.

    Replies are refetched and the tree rebuilt on every call. ``parent_id``
    in the response is the stored value; nesting follows the rebuilt tree.
    """

    def __init__(self, post_service: PostService, thread_service: ThreadService) -> None:
        """Initialize get thread use case.

        Args:
            post_service: Post service
            thread_service: Thread service
        """
        self.post_service = post_service
        self.thread_service = thread_service

    async def execute(self, request: GetThreadRequest) -> GetThreadResponse:
        """Execute get thread flow.

        Args:
            request: Post ID and page parameters

        Returns:
            Post summary, one page of root replies and page metadata

        Raises:
            ValidationError: If the post ID or page parameters are invalid
            NotFoundError: If the post does not exist or is inactive
        """
        post_id = parse_id(request.post_id, PostId, "post_id")

        post = await self.post_service.get_post_by_id(post_id)
        if post is None or not post.is_active:
            raise NotFoundError("Post", request.post_id)

        page = await self.thread_service.get_thread_page(
            post_id, request.page, request.limit
        )

        return GetThreadResponse(
            post=PostSummaryResponse.from_domain(post),
            replies=[ReplyNodeResponse.from_node(node) for node in page.roots],
            pagination=page.pagination,
        )
