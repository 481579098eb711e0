"""JWT token domain service."""

from uuid import UUID

import logfire

from forum.config import AuthSettings
from forum.domain.value import Actor, Role, UserId
from forum.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations.

    Tokens are issued by the authentication service; this service only
    needs to read them, but can mint them for tooling and tests.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, username: str, role: Role = Role.USER) -> str:
        """Create JWT token for user.

        Args:
            user_id: User ID
            username: Username
            role: Platform role

        Returns:
            JWT token string
        """
        with logfire.span(
            "jwt_service.create_token", user_id=user_id, username=username
        ):
            token = create_token(user_id, username, role.value, self.auth_settings)
            logfire.info("JWT token created", user_id=user_id, role=role.value)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.error("JWT token verification failed", error=str(e))
                raise
            logfire.info(
                "JWT token verified", user_id=payload.user_id, role=payload.role
            )
            return payload

    def get_actor_from_token(self, token: str | None) -> Actor | None:
        """Resolve the caller from a JWT without raising.

        Args:
            token: JWT token string (optional)

        Returns:
            Actor if the token is valid, None if it is missing or invalid
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
        except JWTError as e:
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None

        try:
            return Actor(user_id=UserId(UUID(payload.user_id)), role=payload.role)
        except ValueError as e:
            logfire.warn("JWT carries a malformed identity", error=str(e))
            return None
