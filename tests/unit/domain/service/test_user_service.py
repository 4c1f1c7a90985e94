"""Unit tests for UserService."""

import pytest

from agora.domain.repository import UserRepository
from agora.domain.service import UserService
from agora.domain.value import UserId
from tests.harness import create_env_fixture, make_identity

unit_env = create_env_fixture()


class TestRecordIdentity:
    """Tests for record_identity."""

    @pytest.mark.asyncio
    async def test_stores_new_user(self, unit_env):
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)

        user = await user_service.record_identity(make_identity())

        assert user.id == "user-1"
        assert user.username == "alice"
        assert await user_repo.find_by_id(UserId("user-1")) == user

    @pytest.mark.asyncio
    async def test_updates_changed_username(self, unit_env):
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        await user_service.record_identity(make_identity(username="alice"))

        user = await user_service.record_identity(make_identity(username="alicia"))

        assert user.username == "alicia"
        assert (await user_repo.find_by_id(UserId("user-1"))).username == "alicia"

