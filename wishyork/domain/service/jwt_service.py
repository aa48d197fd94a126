"""JWT token domain service."""

import logfire

from wishyork.config import AuthSettings
from wishyork.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for session token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(
        self,
        user_id: str,
        username: str | None = None,
        name: str | None = None,
        avatar_url: str | None = None,
    ) -> str:
        """Create a session token for a user.

        Args:
            user_id: User ID
            username: Public username
            name: Display name
            avatar_url: Avatar URL

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            token = create_token(
                user_id,
                self.auth_settings,
                username=username,
                name=name,
                avatar_url=avatar_url,
            )
            logfire.info("JWT token created", user_id=user_id)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify a session token and extract its payload.

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
                logfire.info("JWT token verified", user_id=payload.user_id)
                return payload
            except Exception as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def get_identity_from_token(self, token: str | None) -> TokenPayload | None:
        """Extract the signed-in identity without raising.

        Args:
            token: JWT token string (optional)

        Returns:
            Token payload if valid, None if missing or invalid
        """
        if not token:
            return None

        try:
            return self.verify_token(token)
        except Exception as e:
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
