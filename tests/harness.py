"""Test harness for unit and integration tests.

Integration tests assume a PostgreSQL database is reachable with the
settings loaded from environment variables (configure via .env or export).
"""

import pytest_asyncio

from agora.config import Settings
from agora.domain.value import UserId, UserIdentity
from agora.util.di import Component
from agora.util.jwt import create_token
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Closes the container afterwards

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no database needed
        unit_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_create_post(unit_env):
            post_service = await unit_env.get(PostService)
            post = await post_service.create_post(UserId("u1"), "Title", url="https://a.b")
            assert post.id is not None
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        # Open request-scoped context
        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def make_identity(user_id: str = "user-1", username: str = "alice") -> UserIdentity:
    """Build an authenticated caller."""
    return UserIdentity(id=UserId(user_id), username=username)


def auth_cookies(identity: UserIdentity) -> dict[str, str]:
    """Cookies carrying a valid identity token for ``identity``."""
    auth = Settings().auth
    return {auth.cookie_name: create_token(identity.id, identity.username, auth)}
