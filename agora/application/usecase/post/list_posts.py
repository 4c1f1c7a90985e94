"""List posts use case."""

import logfire
from pydantic import BaseModel, Field

from agora.application.usecase.base import BaseUseCase, ResponseModel
from agora.application.usecase.post.get_post import PostItem
from agora.domain.service import PostService
from agora.domain.value import (
    MAX_PAGE,
    MAX_PAGE_SIZE,
    PageRequest,
    SortBy,
    SortOrder,
    UserId,
)


class ListPostsRequest(BaseModel):
    """List posts request."""

    limit: int = Field(default=10, gt=0, le=MAX_PAGE_SIZE)
    page: int = Field(default=1, ge=1, le=MAX_PAGE)
    sort_by: SortBy = SortBy.POINTS
    order: SortOrder = SortOrder.DESC
    author: str | None = None  # Filter by author user ID
    site: str | None = None  # Filter by exact URL
    user_id: str | None = None  # Current user ID (if authenticated)


class ListPostsResponse(ResponseModel):
    """List posts response."""

    posts: list[PostItem]
    page: int
    total_pages: int


class ListPostsUseCase(BaseUseCase):
    """Use case for listing posts with filtering and pagination."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Args:
            request: List posts request with filters and pagination

        Returns:
            One page of posts and the page count
        """
        with logfire.span(
            "list_posts.execute",
            sort_by=request.sort_by.value,
            order=request.order.value,
            page=request.page,
        ):
            page = await self.post_service.list_posts(
                PageRequest(
                    limit=request.limit,
                    page=request.page,
                    sort_by=request.sort_by,
                    order=request.order,
                    author=UserId(request.author) if request.author else None,
                    site=request.site or None,
                ),
                viewer_id=UserId(request.user_id) if request.user_id else None,
            )

            return ListPostsResponse(
                posts=[PostItem.from_view(post) for post in page.items],
                page=page.page,
                total_pages=page.total_pages,
            )
