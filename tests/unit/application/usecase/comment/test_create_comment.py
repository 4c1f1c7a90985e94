"""Unit tests for CreateCommentUseCase."""

import pytest

from agora.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
)
from agora.domain.error import NotFoundError, ValidationError
from agora.domain.repository import PostRepository
from agora.domain.service import PostService
from agora.domain.value import UserId
from tests.harness import create_env_fixture, make_identity

unit_env = create_env_fixture()


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_top_level_comment_carries_author(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        post_service = await unit_env.get(PostService)
        post = await post_service.create_post(UserId("op"), "Thread", content="Go")

        # Act
        response = await use_case.execute(
            CreateCommentRequest(
                content="First comment", author=make_identity(), post_id=post.id
            )
        )

        # Assert
        comment = response.comment
        assert comment.post_id == post.id
        assert comment.parent_comment_id is None
        assert comment.user_id == "user-1"
        assert comment.author.username == "alice"
        assert comment.comment_upvotes == []
        assert comment.child_comments == []

    @pytest.mark.asyncio
    async def test_reply_sets_depth_and_parent(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_service.create_post(UserId("op"), "Thread", content="Go")
        root = await use_case.execute(
            CreateCommentRequest(
                content="Root", author=make_identity(), post_id=post.id
            )
        )

        reply = await use_case.execute(
            CreateCommentRequest(
                content="Reply", author=make_identity(), parent_id=root.comment.id
            )
        )

        assert reply.comment.depth == 1
        assert reply.comment.parent_comment_id == root.comment.id
        assert reply.comment.post_id == post.id
        assert (await post_repo.find_by_id(post.id)).comment_count == 2

    @pytest.mark.asyncio
    async def test_response_uses_camel_case_keys(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        post_service = await unit_env.get(PostService)
        post = await post_service.create_post(UserId("op"), "Thread", content="Go")

        response = await use_case.execute(
            CreateCommentRequest(
                content="Hello", author=make_identity(), post_id=post.id
            )
        )

        dumped = response.model_dump(by_alias=True)["comment"]
        assert dumped["parentCommentId"] is None
        assert dumped["commentUpvotes"] == []
        assert dumped["childComments"] == []
        assert "userId" in dumped and "createdAt" in dumped

    @pytest.mark.asyncio
    async def test_short_content_rejected(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        post_service = await unit_env.get(PostService)
        post = await post_service.create_post(UserId("op"), "Thread", content="Go")

        with pytest.raises(ValidationError):
            await use_case.execute(
                CreateCommentRequest(
                    content="ok", author=make_identity(), post_id=post.id
                )
            )

    @pytest.mark.asyncio
    async def test_missing_parent_raises(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                CreateCommentRequest(
                    content="Lost reply", author=make_identity(), parent_id=99
                )
            )
