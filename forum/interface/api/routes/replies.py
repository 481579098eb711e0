"""Reply thread routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel

from forum.application.usecase.reply import (
    CreateReplyRequest,
    CreateReplyUseCase,
    DeleteReplyRequest,
    DeleteReplyResponse,
    DeleteReplyUseCase,
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
    ReplyResponse,
    UpdateReplyRequest,
    UpdateReplyUseCase,
)
from forum.config import ThreadSettings
from forum.domain.error import ValidationError
from forum.domain.service import JWTService
from forum.interface.api.dependencies import require_actor

router = APIRouter(tags=["replies"], route_class=DishkaRoute)


class CreateReplyAPIRequest(BaseModel):
    """API request for creating a reply."""

    # Blank and length checks run on the stripped text in the domain
    content: str
    parent_id: UUID | None = None
    attachment_ids: list[UUID] = []


class UpdateReplyAPIRequest(BaseModel):
    """API request for editing a reply."""

    content: str


@router.get("/posts/{post_id}/replies", response_model=GetThreadResponse)
async def get_thread(
    post_id: str,
    get_thread_use_case: FromDishka[GetThreadUseCase],
    thread_settings: FromDishka[ThreadSettings],
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> GetThreadResponse:
    """Get the reply thread of a post.

    Replies are nested at most two levels deep. ``limit`` counts root
    replies per page while ``pagination.total`` counts every reply.

    Args:
        post_id: Post UUID
        get_thread_use_case: Get thread use case from DI
        thread_settings: Paging defaults and bounds
        page: 1-based page number
        limit: Root replies per page

    Returns:
        Post summary, replies and pagination
    """
    if limit is None:
        limit = thread_settings.default_page_size
    if limit > thread_settings.max_page_size:
        raise ValidationError(
            f"limit must be at most {thread_settings.max_page_size}"
        )

    request = GetThreadRequest(post_id=post_id, page=page, limit=limit)
    return await get_thread_use_case.execute(request)


@router.post(
    "/posts/{post_id}/replies",
    response_model=ReplyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_reply(
    post_id: str,
    request: CreateReplyAPIRequest,
    create_reply_use_case: FromDishka[CreateReplyUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ReplyResponse:
    """Reply to a post, or to another reply of the same post.

    Requires authentication. Uploaded files listed in ``attachment_ids`` are
    attached when the caller uploaded them and they are still unused.

    Args:
        post_id: Post UUID
        request: Reply content, optional parent and uploads
        create_reply_use_case: Create reply use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created reply
    """
    actor = require_actor(jwt_service, auth_token, "reply")
    use_case_request = CreateReplyRequest(
        post_id=post_id,
        actor=actor,
        content=request.content,
        parent_id=str(request.parent_id) if request.parent_id else None,
        attachment_ids=[str(file_id) for file_id in request.attachment_ids],
    )
    return await create_reply_use_case.execute(use_case_request)


@router.patch("/replies/{reply_id}", response_model=ReplyResponse)
async def update_reply(
    reply_id: str,
    request: UpdateReplyAPIRequest,
    update_reply_use_case: FromDishka[UpdateReplyUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ReplyResponse:
    """Edit a reply's content.

    Only the author may edit, and not while the post is locked; moderators
    may always edit.
    """
    actor = require_actor(jwt_service, auth_token, "edit replies")
    use_case_request = UpdateReplyRequest(
        reply_id=reply_id, actor=actor, content=request.content
    )
    return await update_reply_use_case.execute(use_case_request)


@router.delete("/replies/{reply_id}", response_model=DeleteReplyResponse)
async def delete_reply(
    reply_id: str,
    delete_reply_use_case: FromDishka[DeleteReplyUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteReplyResponse:
    """Soft-delete a reply. Its own replies stay visible as top-level replies."""
    actor = require_actor(jwt_service, auth_token, "delete replies")
    return await delete_reply_use_case.execute(
        DeleteReplyRequest(reply_id=reply_id, actor=actor)
    )
