"""Application layer DI providers."""

from dishka import Scope, provide

from forum.application.usecase.post import LockPostUseCase, RecountRepliesUseCase
from forum.application.usecase.reply import (
    CreateReplyUseCase,
    DeleteReplyUseCase,
    GetThreadUseCase,
    UpdateReplyUseCase,
)
from forum.domain.service import (
    AttachmentService,
    PostService,
    ReplyService,
    ThreadService,
)
from forum.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Reply use cases
    @provide(scope=Scope.REQUEST)
    def get_get_thread_use_case(
        self, post_service: PostService, thread_service: ThreadService
    ) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(
            post_service=post_service, thread_service=thread_service
        )

    @provide(scope=Scope.REQUEST)
    def get_create_reply_use_case(
        self,
        reply_service: ReplyService,
        post_service: PostService,
        attachment_service: AttachmentService,
    ) -> CreateReplyUseCase:
        """Provide create reply use case."""
        return CreateReplyUseCase(
            reply_service=reply_service,
            post_service=post_service,
            attachment_service=attachment_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_reply_use_case(
        self,
        reply_service: ReplyService,
        post_service: PostService,
        attachment_service: AttachmentService,
    ) -> UpdateReplyUseCase:
        """Provide update reply use case."""
        return UpdateReplyUseCase(
            reply_service=reply_service,
            post_service=post_service,
            attachment_service=attachment_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_reply_use_case(
        self, reply_service: ReplyService, post_service: PostService
    ) -> DeleteReplyUseCase:
        """Provide delete reply use case."""
        return DeleteReplyUseCase(
            reply_service=reply_service, post_service=post_service
        )

    # Post moderation use cases
    @provide(scope=Scope.REQUEST)
    def get_lock_post_use_case(self, post_service: PostService) -> LockPostUseCase:
        """Provide lock post use case."""
        return LockPostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_recount_replies_use_case(
        self, post_service: PostService
    ) -> RecountRepliesUseCase:
        """Provide recount replies use case."""
        return RecountRepliesUseCase(post_service=post_service)
