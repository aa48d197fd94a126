"""Unit tests for session token helpers."""

from uuid import uuid4

import jwt
import pytest

from wishyork.config import AuthSettings
from wishyork.domain.service import JWTService
from wishyork.util.jwt import JWTError, create_token, verify_token


@pytest.fixture
def settings() -> AuthSettings:
    return AuthSettings(jwt_secret="test-secret")


class TestTokens:
    def test_token_round_trips_identity_claims(self, settings):
        # Arrange
        user_id = str(uuid4())

        # Act
        token = create_token(
            user_id, settings, username="alice", name="Alice", avatar_url="a.png"
        )
        payload = verify_token(token, settings)

        # Assert
        assert payload.user_id == user_id
        assert payload.username == "alice"
        assert payload.name == "Alice"
        assert payload.avatar_url == "a.png"
        assert str(payload.user_uuid) == user_id

    def test_wrong_secret_is_invalid(self, settings):
        # Arrange
        token = create_token(str(uuid4()), settings)

        # Act & Assert
        with pytest.raises(JWTError, match="Invalid token"):
            verify_token(token, AuthSettings(jwt_secret="other-secret"))

    def test_expired_token(self, settings):
        # Arrange
        token = create_token(str(uuid4()), settings.model_copy(update={"jwt_expiry_days": -1}))

        # Act & Assert
        with pytest.raises(JWTError, match="expired"):
            verify_token(token, settings)

    def test_non_uuid_user_id_is_invalid(self, settings):
        # Arrange
        token = jwt.encode(
            {"user_id": "alice", "exp": 4102444800}, settings.jwt_secret, "HS256"
        )

        # Act & Assert
        with pytest.raises(JWTError):
            verify_token(token, settings)


class TestJWTService:
    def test_missing_or_bad_token_is_anonymous(self, settings):
        # Arrange
        service = JWTService(auth_settings=settings)

        # Act & Assert
        assert service.get_identity_from_token(None) is None
        assert service.get_identity_from_token("garbage") is None

    def test_valid_token_yields_identity(self, settings):
        # Arrange
        service = JWTService(auth_settings=settings)
        user_id = str(uuid4())

        # Act
        identity = service.get_identity_from_token(service.create_token(user_id))

        # Assert
        assert identity is not None
        assert identity.user_id == user_id
