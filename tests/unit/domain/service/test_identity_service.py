"""Unit tests for IdentityService."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from agora.config import AuthSettings
from agora.domain.service import IdentityService
from tests.harness import make_identity


@pytest.fixture
def auth_settings():
    return AuthSettings(jwt_secret="test-secret")


@pytest.fixture
def identity_service(auth_settings):
    return IdentityService(auth_settings)


class TestResolve:
    """Tests for resolving the caller from a token."""

    def test_valid_token_resolves_identity(self, identity_service):
        # Arrange
        identity = make_identity(user_id="u-42", username="bob")
        token = identity_service.issue_token(identity)

        # Act
        resolved = identity_service.resolve(token)

        # Assert
        assert resolved == identity

    @pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
    def test_missing_or_garbage_token_is_anonymous(self, identity_service, token):
        assert identity_service.resolve(token) is None

    def test_token_signed_with_other_secret_is_anonymous(self, identity_service):
        other = IdentityService(AuthSettings(jwt_secret="other-secret"))
        token = other.issue_token(make_identity())

        assert identity_service.resolve(token) is None

    def test_expired_token_is_anonymous(self, identity_service, auth_settings):
        token = jwt.encode(
            {
                "user_id": "user-1",
                "username": "alice",
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            auth_settings.jwt_secret,
            algorithm=auth_settings.jwt_algorithm,
        )

        assert identity_service.resolve(token) is None

    def test_token_without_username_is_anonymous(self, identity_service, auth_settings):
        token = jwt.encode(
            {
                "user_id": "user-1",
                "exp": datetime.now(timezone.utc) + timedelta(days=1),
            },
            auth_settings.jwt_secret,
            algorithm=auth_settings.jwt_algorithm,
        )

        assert identity_service.resolve(token) is None
