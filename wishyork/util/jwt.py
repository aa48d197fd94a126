"""JWT session token utilities."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from pydantic import BaseModel

from wishyork.config import AuthSettings
from wishyork.domain.value import UserId


class TokenPayload(BaseModel):
    """JWT session token payload.

    Carries the signed-in identity: stable user id plus the display
    fields the identity provider knows about.
    """

    user_id: str
    username: str | None = None
    name: str | None = None
    avatar_url: str | None = None
    exp: datetime

    @property
    def user_uuid(self) -> UserId:
        return UserId(UUID(self.user_id))


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str,
    settings: AuthSettings,
    username: str | None = None,
    name: str | None = None,
    avatar_url: str | None = None,
) -> str:
    """Create a session token for the user.

    Args:
        user_id: User ID
        settings: Authentication settings
        username: Public username
        name: Display name
        avatar_url: Avatar URL

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "user_id": user_id,
        "username": username,
        "name": name,
        "avatar_url": avatar_url,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a session token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        token_payload = TokenPayload(**payload)
        UUID(token_payload.user_id)
        return token_payload
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except (jwt.InvalidTokenError, ValueError):
        raise JWTError("Invalid token")
