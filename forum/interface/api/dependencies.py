"""Request helpers shared by routes."""

from fastapi import HTTPException, status

from forum.domain.service import JWTService
from forum.domain.value import Actor


def require_actor(jwt_service: JWTService, auth_token: str | None, action: str) -> Actor:
    """Resolve the caller from the auth cookie or answer 401.

    Args:
        jwt_service: JWT service
        auth_token: Value of the ``auth_token`` cookie
        action: Description used in the error message

    Returns:
        The authenticated caller

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    actor = jwt_service.get_actor_from_token(auth_token)
    if actor is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return actor
