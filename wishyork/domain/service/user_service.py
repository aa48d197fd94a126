"""User domain service."""

import logfire

from wishyork.domain.model import AuthorSnapshot, UserProfile
from wishyork.domain.repository import UserRepository
from wishyork.domain.value import UserId, Username
from wishyork.util.jwt import TokenPayload

DEFAULT_USERNAME = "user"


def _username_or_default(identity: TokenPayload) -> Username:
    try:
        return Username(identity.username or DEFAULT_USERNAME)
    except ValueError:
        logfire.warn(
            "Unusable username in session token", user_id=identity.user_id
        )
        return Username(DEFAULT_USERNAME)


class UserService:
    """Domain service for user profile lookups."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User profile repository
        """
        self.user_repository = user_repository

    async def get_profile(self, user_id: UserId) -> UserProfile | None:
        """Get a user profile by ID.

        Args:
            user_id: User ID

        Returns:
            Profile if found, None otherwise
        """
        with logfire.span("user_service.get_profile", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User profile not found", user_id=str(user_id))
            return user

    async def get_author_snapshot(self, identity: TokenPayload) -> AuthorSnapshot:
        """Build the author snapshot stored on a new comment.

        Stored profile fields win; missing ones fall back to the signed-in
        identity, and the username falls back to "user".

        Args:
            identity: Verified session token payload

        Returns:
            Author snapshot for the comment
        """
        user_id = identity.user_uuid
        profile = await self.get_profile(user_id)

        name = (profile.name if profile else None) or identity.name or DEFAULT_USERNAME
        username = profile.username if profile else _username_or_default(identity)
        avatar_url = (profile.avatar_url if profile else None) or identity.avatar_url

        return AuthorSnapshot(
            author_id=user_id,
            name=name,
            username=username,
            avatar_url=avatar_url,
        )
