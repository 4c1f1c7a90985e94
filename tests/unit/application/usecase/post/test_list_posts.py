"""Unit tests for ListPostsUseCase."""

import pytest

from agora.application.usecase.post import ListPostsRequest, ListPostsUseCase
from agora.domain.service import PostService
from agora.domain.value import SortBy, SortOrder, UserId
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def seed_posts(unit_env, count: int, author: str = "author-1") -> list[int]:
    post_service = await unit_env.get(PostService)
    ids = []
    for i in range(count):
        post = await post_service.create_post(
            UserId(author), f"Post {i}", url=f"https://site{i % 2}.example"
        )
        ids.append(post.id)
    return ids


class TestListPostsUseCase:
    """Tests for ListPostsUseCase."""

    @pytest.mark.asyncio
    async def test_last_page_holds_remainder(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        await seed_posts(unit_env, 23)

        # Act
        response = await use_case.execute(ListPostsRequest(limit=10, page=3))

        # Assert
        assert len(response.posts) == 3
        assert response.page == 3
        assert response.total_pages == 3

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)
        await seed_posts(unit_env, 5)

        response = await use_case.execute(ListPostsRequest(limit=10, page=4))

        assert response.posts == []
        assert response.total_pages == 1

    @pytest.mark.asyncio
    async def test_recent_ascending_keeps_creation_order(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)
        ids = await seed_posts(unit_env, 3)

        response = await use_case.execute(
            ListPostsRequest(sort_by=SortBy.RECENT, order=SortOrder.ASC)
        )

        assert [post.id for post in response.posts] == ids

    @pytest.mark.asyncio
    async def test_filters_by_author_and_site(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)
        await seed_posts(unit_env, 4, author="author-1")
        theirs = await seed_posts(unit_env, 2, author="author-2")

        by_author = await use_case.execute(ListPostsRequest(author="author-2"))
        by_site = await use_case.execute(
            ListPostsRequest(site="https://site1.example")
        )

        assert sorted(post.id for post in by_author.posts) == theirs
        assert len(by_site.posts) == 3
        assert all(post.url == "https://site1.example" for post in by_site.posts)

    @pytest.mark.asyncio
    async def test_no_posts_yields_zero_pages(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)

        response = await use_case.execute(ListPostsRequest())

        assert response.posts == []
        assert response.total_pages == 0
