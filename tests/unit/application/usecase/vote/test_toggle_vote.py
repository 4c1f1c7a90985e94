"""Unit tests for ToggleVoteUseCase."""

import pytest

from agora.application.usecase.vote import ToggleVoteRequest, ToggleVoteUseCase
from agora.domain.error import NotFoundError
from agora.domain.repository import UserRepository
from agora.domain.service import CommentService, PostService
from agora.domain.value import UserId, VotableType
from tests.harness import create_env_fixture, make_identity

unit_env = create_env_fixture()


class TestToggleVoteUseCase:
    """Tests for ToggleVoteUseCase."""

    @pytest.mark.asyncio
    async def test_post_toggle_round_trip(self, unit_env):
        """Upvoting twice leaves the post where it started."""
        # Arrange
        use_case = await unit_env.get(ToggleVoteUseCase)
        post_service = await unit_env.get(PostService)
        post = await post_service.create_post(UserId("op"), "Vote me", content="x")
        request = ToggleVoteRequest(
            votable_type=VotableType.POST, votable_id=post.id, user=make_identity()
        )

        # Act
        first = await use_case.execute(request)
        second = await use_case.execute(request)

        # Assert
        assert (first.count, first.is_upvoted) == (1, True)
        assert (second.count, second.is_upvoted) == (0, False)
        assert second.user_id == "user-1"
        assert second.votable_id == post.id

    @pytest.mark.asyncio
    async def test_comment_toggle_records_voter(self, unit_env):
        use_case = await unit_env.get(ToggleVoteUseCase)
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        user_repo = await unit_env.get(UserRepository)
        post = await post_service.create_post(UserId("op"), "Thread", content="x")
        comment = await comment_service.record_comment(
            UserId("op"), "Upvote me", post_id=post.id
        )

        response = await use_case.execute(
            ToggleVoteRequest(
                votable_type=VotableType.COMMENT,
                votable_id=comment.id,
                user=make_identity(),
            )
        )

        assert response.votable_type == VotableType.COMMENT
        assert response.count == 1
        assert await user_repo.find_by_id(UserId("user-1")) is not None

    @pytest.mark.asyncio
    async def test_missing_item_raises(self, unit_env):
        use_case = await unit_env.get(ToggleVoteUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                ToggleVoteRequest(
                    votable_type=VotableType.POST, votable_id=5, user=make_identity()
                )
            )
