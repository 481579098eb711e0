"""Thread read domain service."""

import logfire

from forum.domain.value import PostId

from .attachment_service import AttachmentService
from .base import Service
from .pagination import TreePage, paginate_tree
from .reply_service import ReplyService
from .thread_builder import build_reply_tree


class ThreadService(Service):
    """Assembles the paginated reply tree of a post.

    Nothing is cached: every call refetches the replies and rebuilds the
    tree, so sibling order always follows the current fetch order.
    """

    def __init__(
        self, reply_service: ReplyService, attachment_service: AttachmentService
    ) -> None:
        """Initialize thread service.

        Args:
            reply_service: Reply service
            attachment_service: Attachment service
        """
        self.reply_service = reply_service
        self.attachment_service = attachment_service

    async def get_thread_page(self, post_id: PostId, page: int, limit: int) -> TreePage:
        """Build and paginate the reply tree of a post.

        Args:
            post_id: Post ID
            page: 1-based page number
            limit: Roots per page

        Returns:
            Requested page of root replies with nested children

        Raises:
            ValidationError: If page or limit is below 1
        """
        with logfire.span(
            "thread_service.get_thread_page",
            post_id=str(post_id),
            page=page,
            limit=limit,
        ):
            entries = await self.reply_service.get_thread_replies(post_id)
            attachments = await self.attachment_service.attachments_for_replies(
                [entry.reply.id for entry in entries]
            )
            roots = build_reply_tree(entries, attachments)
            result = paginate_tree(roots, page, limit)
            logfire.info(
                "Thread built",
                post_id=str(post_id),
                roots=len(roots),
                total=result.pagination.total,
                pages=result.pagination.pages,
            )
            return result
