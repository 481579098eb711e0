"""Post moderation routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel

from forum.application.usecase.post import (
    LockPostRequest,
    LockPostUseCase,
    PostSummaryResponse,
    RecountRepliesRequest,
    RecountRepliesUseCase,
)
from forum.domain.service import JWTService
from forum.interface.api.dependencies import require_actor

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class LockPostAPIRequest(BaseModel):
    """API request for locking or unlocking a post."""

    is_locked: bool = True


@router.post("/{post_id}/lock", response_model=PostSummaryResponse)
async def lock_post(
    post_id: str,
    request: LockPostAPIRequest,
    lock_post_use_case: FromDishka[LockPostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PostSummaryResponse:
    """Lock or unlock a post. Moderators and admins only."""
    actor = require_actor(jwt_service, auth_token, "lock posts")
    return await lock_post_use_case.execute(
        LockPostRequest(post_id=post_id, actor=actor, is_locked=request.is_locked)
    )


@router.post("/{post_id}/recount", response_model=PostSummaryResponse)
async def recount_replies(
    post_id: str,
    recount_replies_use_case: FromDishka[RecountRepliesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PostSummaryResponse:
    """Rebuild a post's reply counter from its active replies."""
    actor = require_actor(jwt_service, auth_token, "recount replies")
    return await recount_replies_use_case.execute(
        RecountRepliesRequest(post_id=post_id, actor=actor)
    )
