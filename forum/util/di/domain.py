"""Domain layer DI providers."""

from dishka import Scope, provide

from forum.config import AuthSettings
from forum.domain.repository import (
    AttachmentRepository,
    PostRepository,
    ReplyRepository,
)
from forum.domain.service import (
    AttachmentService,
    JWTService,
    PostService,
    ReplyService,
    ThreadService,
)
from forum.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_reply_service(self, reply_repository: ReplyRepository) -> ReplyService:
        """Provide reply domain service."""
        return ReplyService(reply_repository=reply_repository)

    @provide
    def get_post_service(
        self, post_repository: PostRepository, reply_repository: ReplyRepository
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            post_repository=post_repository, reply_repository=reply_repository
        )

    @provide
    def get_attachment_service(
        self, attachment_repository: AttachmentRepository
    ) -> AttachmentService:
        """Provide attachment domain service."""
        return AttachmentService(attachment_repository=attachment_repository)

    @provide
    def get_thread_service(
        self, reply_service: ReplyService, attachment_service: AttachmentService
    ) -> ThreadService:
        """Provide thread domain service."""
        return ThreadService(
            reply_service=reply_service, attachment_service=attachment_service
        )
