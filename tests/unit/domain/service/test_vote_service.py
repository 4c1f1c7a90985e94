"""Unit tests for VoteService."""

import pytest

from agora.domain.error import NotFoundError
from agora.domain.repository import CommentRepository, PostRepository, VoteRepository
from agora.domain.service import CommentService, PostService, VoteService
from agora.domain.value import CommentId, PostId, UserId, VotableType
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()

AUTHOR = UserId("author-1")
VOTER = UserId("voter-1")


class TestTogglePostVote:
    """Tests for toggling votes on posts."""

    @pytest.mark.asyncio
    async def test_first_toggle_upvotes(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post = await post_service.create_post(AUTHOR, "Votable", content="Body")

        # Act
        toggle = await vote_service.toggle_vote(VotableType.POST, post.id, VOTER)

        # Assert
        assert toggle.points == 1
        assert toggle.is_upvoted is True
        vote = await vote_repo.find_by_user_and_votable(
            VOTER, VotableType.POST, post.id
        )
        assert vote is not None

    @pytest.mark.asyncio
    async def test_toggles_alternate(self, unit_env):
        """Points go +1, -1, +1 and the vote record follows."""
        post_service = await unit_env.get(PostService)
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_service.create_post(AUTHOR, "Votable", content="Body")

        results = [
            await vote_service.toggle_vote(VotableType.POST, post.id, VOTER)
            for _ in range(3)
        ]

        assert [(r.points, r.is_upvoted) for r in results] == [
            (1, True),
            (0, False),
            (1, True),
        ]
        assert (await post_repo.find_by_id(post.id)).points == 1

    @pytest.mark.asyncio
    async def test_votes_from_different_users_add_up(self, unit_env):
        post_service = await unit_env.get(PostService)
        vote_service = await unit_env.get(VoteService)
        post = await post_service.create_post(AUTHOR, "Popular", content="Body")

        await vote_service.toggle_vote(VotableType.POST, post.id, UserId("a"))
        toggle = await vote_service.toggle_vote(VotableType.POST, post.id, UserId("b"))

        assert toggle.points == 2
        assert toggle.is_upvoted is True

    @pytest.mark.asyncio
    async def test_missing_post_raises_and_records_nothing(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)

        with pytest.raises(NotFoundError, match="Post not found: 42"):
            await vote_service.toggle_vote(VotableType.POST, PostId(42), VOTER)

        vote = await vote_repo.find_by_user_and_votable(VOTER, VotableType.POST, 42)
        assert vote is None


class TestToggleCommentVote:
    """Tests for toggling votes on comments."""

    @pytest.mark.asyncio
    async def test_comment_vote_leaves_post_untouched(self, unit_env):
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = await post_service.create_post(AUTHOR, "Thread", content="Body")
        comment = await comment_service.record_comment(
            AUTHOR, "Nice one", post_id=post.id
        )

        toggle = await vote_service.toggle_vote(
            VotableType.COMMENT, comment.id, VOTER
        )

        assert toggle.points == 1
        assert (await comment_repo.find_by_id(comment.id)).points == 1
        assert (await post_repo.find_by_id(post.id)).points == 0

    @pytest.mark.asyncio
    async def test_same_id_different_type_is_separate(self, unit_env):
        """Post 1 and comment 1 hold independent votes."""
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        vote_service = await unit_env.get(VoteService)
        post = await post_service.create_post(AUTHOR, "Thread", content="Body")
        comment = await comment_service.record_comment(
            AUTHOR, "Nice one", post_id=post.id
        )
        assert post.id == comment.id == 1

        await vote_service.toggle_vote(VotableType.POST, post.id, VOTER)
        toggle = await vote_service.toggle_vote(
            VotableType.COMMENT, comment.id, VOTER
        )

        assert toggle.is_upvoted is True

    @pytest.mark.asyncio
    async def test_missing_comment_raises(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(NotFoundError, match="Comment not found"):
            await vote_service.toggle_vote(VotableType.COMMENT, CommentId(7), VOTER)
