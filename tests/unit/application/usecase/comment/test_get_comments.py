"""Unit tests for GetCommentsUseCase and GetRepliesUseCase."""

import pytest

from agora.application.usecase.comment import (
    GetCommentsRequest,
    GetCommentsUseCase,
    GetRepliesRequest,
    GetRepliesUseCase,
)
from agora.domain.service import CommentService, PostService, VoteService
from agora.domain.value import SortBy, SortOrder, UserId, VotableType
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

AUTHOR = UserId("author-1")


async def seed_thread(unit_env, replies: int = 0):
    """Create a post with one top-level comment and some replies to it."""
    post_service = await unit_env.get(PostService)
    comment_service = await unit_env.get(CommentService)
    post = await post_service.create_post(AUTHOR, "Thread", content="Go")
    root = await comment_service.record_comment(AUTHOR, "Root", post_id=post.id)
    reply_ids = []
    for i in range(replies):
        reply = await comment_service.record_comment(
            AUTHOR, f"Reply {i}", parent_id=root.id
        )
        reply_ids.append(reply.id)
    return post, root, reply_ids


class TestGetCommentsUseCase:
    """Tests for GetCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_lists_top_level_only(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentsUseCase)
        post, root, _ = await seed_thread(unit_env, replies=3)

        # Act
        response = await use_case.execute(GetCommentsRequest(post_id=post.id))

        # Assert
        assert [c.id for c in response.comments] == [root.id]
        assert response.comments[0].comment_count == 3
        assert response.comments[0].child_comments == []
        assert response.total_pages == 1

    @pytest.mark.asyncio
    async def test_include_children_attaches_first_two(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)
        post, _, reply_ids = await seed_thread(unit_env, replies=5)

        response = await use_case.execute(
            GetCommentsRequest(post_id=post.id, include_children=True)
        )

        children = response.comments[0].child_comments
        assert [c.id for c in children] == reply_ids[:2]
        assert all(c.depth == 1 for c in children)

    @pytest.mark.asyncio
    async def test_caller_vote_is_projected(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)
        vote_service = await unit_env.get(VoteService)
        post, root, _ = await seed_thread(unit_env)
        await vote_service.toggle_vote(VotableType.COMMENT, root.id, UserId("voter"))

        response = await use_case.execute(
            GetCommentsRequest(post_id=post.id, user_id="voter")
        )

        comment = response.comments[0]
        assert comment.points == 1
        assert [v.user_id for v in comment.comment_upvotes] == ["voter"]

    @pytest.mark.asyncio
    async def test_unknown_post_yields_empty_page(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)

        response = await use_case.execute(GetCommentsRequest(post_id=404))

        assert response.comments == []
        assert response.total_pages == 0


class TestGetRepliesUseCase:
    """Tests for GetRepliesUseCase."""

    @pytest.mark.asyncio
    async def test_pages_through_replies(self, unit_env):
        use_case = await unit_env.get(GetRepliesUseCase)
        _, root, reply_ids = await seed_thread(unit_env, replies=3)

        first = await use_case.execute(
            GetRepliesRequest(comment_id=root.id, limit=2, page=1)
        )
        second = await use_case.execute(
            GetRepliesRequest(comment_id=root.id, limit=2, page=2)
        )

        assert [c.id for c in first.comments] == reply_ids[:2]
        assert [c.id for c in second.comments] == reply_ids[2:]
        assert first.total_pages == second.total_pages == 2

    @pytest.mark.asyncio
    async def test_points_order_puts_upvoted_reply_first(self, unit_env):
        use_case = await unit_env.get(GetRepliesUseCase)
        vote_service = await unit_env.get(VoteService)
        _, root, reply_ids = await seed_thread(unit_env, replies=3)
        await vote_service.toggle_vote(
            VotableType.COMMENT, reply_ids[2], UserId("voter")
        )

        response = await use_case.execute(
            GetRepliesRequest(
                comment_id=root.id, sort_by=SortBy.POINTS, order=SortOrder.DESC
            )
        )

        assert [c.id for c in response.comments] == [
            reply_ids[2],
            reply_ids[0],
            reply_ids[1],
        ]
