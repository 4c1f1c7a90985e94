"""Unit tests for the in-memory repositories and transaction manager.

The in-memory repositories stand in for PostgreSQL in unit and e2e tests,
so they must agree with the SQL ones on joins, ordering and rollback.
"""

import pytest

from agora.domain.error import ConflictError
from agora.domain.model import User
from agora.domain.value import (
    CommentScope,
    PostId,
    SortBy,
    SortOrder,
    UserId,
    VotableType,
)
from agora.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryDatabase,
    InMemoryPostRepository,
    InMemoryTransactionManager,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)

AUTHOR = UserId("author-1")


@pytest.fixture
def database():
    return InMemoryDatabase()


class TestInMemoryTransactionManager:
    """Tests for snapshot/restore transactions."""

    @pytest.mark.asyncio
    async def test_exception_restores_every_table(self, database):
        # Arrange
        posts = InMemoryPostRepository(database)
        votes = InMemoryVoteRepository(database)
        transactions = InMemoryTransactionManager(database)
        post = await posts.create(
            AUTHOR, "Kept", url="https://kept.example", content=None
        )

        # Act
        with pytest.raises(RuntimeError):
            async with transactions.atomic():
                await posts.add_points(post.id, 1)
                await votes.save(AUTHOR, VotableType.POST, post.id)
                await posts.create(AUTHOR, "Dropped", url=None, content="x")
                raise RuntimeError("boom")

        # Assert
        assert list(database.posts) == [post.id]
        assert database.posts[post.id].points == 0
        assert database.votes == {}

    @pytest.mark.asyncio
    async def test_success_keeps_changes(self, database):
        posts = InMemoryPostRepository(database)
        transactions = InMemoryTransactionManager(database)
        post = await posts.create(AUTHOR, "Post", url=None, content="x")

        async with transactions.atomic():
            await posts.increment_comment_count(post.id)

        assert database.posts[post.id].comment_count == 1

    @pytest.mark.asyncio
    async def test_sequences_are_not_rolled_back(self, database):
        posts = InMemoryPostRepository(database)
        transactions = InMemoryTransactionManager(database)

        with pytest.raises(RuntimeError):
            async with transactions.atomic():
                await posts.create(AUTHOR, "Gone", url=None, content="x")
                raise RuntimeError("boom")
        post = await posts.create(AUTHOR, "Next", url=None, content="x")

        assert post.id == 2


class TestInMemoryVoteRepository:
    """Tests for the vote uniqueness rule."""

    @pytest.mark.asyncio
    async def test_duplicate_vote_conflicts(self, database):
        votes = InMemoryVoteRepository(database)
        await votes.save(AUTHOR, VotableType.POST, PostId(1))

        with pytest.raises(ConflictError):
            await votes.save(AUTHOR, VotableType.POST, PostId(1))

    @pytest.mark.asyncio
    async def test_delete_reports_whether_a_vote_existed(self, database):
        votes = InMemoryVoteRepository(database)
        await votes.save(AUTHOR, VotableType.COMMENT, 3)

        assert await votes.delete_by_user_and_votable(AUTHOR, VotableType.COMMENT, 3)
        assert not await votes.delete_by_user_and_votable(
            AUTHOR, VotableType.COMMENT, 3
        )


class TestInMemoryPostRepository:
    """Tests for post views and listings."""

    @pytest.mark.asyncio
    async def test_view_joins_author_and_viewer_vote(self, database):
        users = InMemoryUserRepository(database)
        posts = InMemoryPostRepository(database)
        votes = InMemoryVoteRepository(database)
        await users.save(User(id=AUTHOR, username="ada"))
        post = await posts.create(AUTHOR, "Joined", url=None, content="x")
        await votes.save(UserId("viewer"), VotableType.POST, post.id)

        as_viewer = await posts.find_view(post.id, viewer_id=UserId("viewer"))
        as_other = await posts.find_view(post.id, viewer_id=UserId("other"))

        assert as_viewer.author.username == "ada"
        assert as_viewer.is_upvoted is True
        assert as_other.is_upvoted is False

    @pytest.mark.asyncio
    async def test_unknown_author_has_no_username(self, database):
        posts = InMemoryPostRepository(database)
        post = await posts.create(UserId("ghost"), "Orphan", url=None, content="x")

        view = await posts.find_view(post.id)

        assert view.author.id == "ghost"
        assert view.author.username is None

    @pytest.mark.asyncio
    async def test_points_ties_break_by_id(self, database):
        posts = InMemoryPostRepository(database)
        first = await posts.create(AUTHOR, "A", url=None, content="x")
        second = await posts.create(AUTHOR, "B", url=None, content="x")
        third = await posts.create(AUTHOR, "C", url=None, content="x")
        await posts.add_points(third.id, 2)

        listed = await posts.find_all(sort_by=SortBy.POINTS, order=SortOrder.DESC)

        assert [p.id for p in listed] == [third.id, first.id, second.id]


class TestInMemoryCommentRepository:
    """Tests for comment scopes and reply previews."""

    @pytest.mark.asyncio
    async def test_find_children_caps_per_parent(self, database):
        comments = InMemoryCommentRepository(database)
        root_a = await comments.create(PostId(1), AUTHOR, "Root A")
        root_b = await comments.create(PostId(1), AUTHOR, "Root B")
        for i in range(4):
            await comments.create(
                PostId(1), AUTHOR, f"Reply A{i}", parent_id=root_a.id, depth=1
            )
        only_b = await comments.create(
            PostId(1), AUTHOR, "Reply B", parent_id=root_b.id, depth=1
        )

        children = await comments.find_children([root_a.id, root_b.id], per_parent=2)

        assert len(children[root_a.id]) == 2
        assert [c.id for c in children[root_b.id]] == [only_b.id]

    @pytest.mark.asyncio
    async def test_parents_without_replies_are_absent(self, database):
        comments = InMemoryCommentRepository(database)
        root = await comments.create(PostId(1), AUTHOR, "Lonely")

        assert await comments.find_children([root.id]) == {}

    @pytest.mark.asyncio
    async def test_scopes_do_not_overlap(self, database):
        comments = InMemoryCommentRepository(database)
        root = await comments.create(PostId(1), AUTHOR, "Root")
        await comments.create(PostId(1), AUTHOR, "Reply", parent_id=root.id, depth=1)
        await comments.create(PostId(2), AUTHOR, "Elsewhere")

        assert await comments.count(CommentScope.top_level(PostId(1))) == 1
        assert await comments.count(CommentScope.replies(root.id)) == 1
        assert await comments.count(CommentScope.top_level(PostId(2))) == 1
