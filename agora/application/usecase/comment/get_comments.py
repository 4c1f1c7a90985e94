"""Get comments use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel, Field

from agora.application.usecase.base import BaseUseCase, ResponseModel
from agora.application.usecase.post.get_post import AuthorItem
from agora.domain.model.comment import CommentView
from agora.domain.service import CommentService
from agora.domain.service.pagination import Page
from agora.domain.value import (
    MAX_PAGE,
    MAX_PAGE_SIZE,
    CommentScope,
    PageRequest,
    PostId,
    SortBy,
    SortOrder,
    UserId,
)


class CommentUpvoteItem(ResponseModel):
    """The caller's upvote on a comment."""

    user_id: str


class CommentItem(ResponseModel):
    """Comment as returned to API clients."""

    id: int
    user_id: str
    post_id: int
    parent_comment_id: int | None
    content: str
    depth: int
    comment_count: int
    points: int
    created_at: datetime
    comment_upvotes: list[CommentUpvoteItem]
    author: AuthorItem
    child_comments: list["CommentItem"]

    @classmethod
    def from_view(cls, comment: CommentView) -> "CommentItem":
        return cls(
            id=comment.id,
            user_id=comment.author_id,
            post_id=comment.post_id,
            parent_comment_id=comment.parent_id,
            content=comment.content,
            depth=comment.depth,
            comment_count=comment.comment_count,
            points=comment.points,
            created_at=comment.created_at,
            comment_upvotes=[
                CommentUpvoteItem(user_id=vote.user_id)
                for vote in comment.comment_upvotes
            ],
            author=AuthorItem(id=comment.author.id, username=comment.author.username),
            child_comments=[cls.from_view(child) for child in comment.child_comments],
        )


class CommentListParams(BaseModel):
    """Pagination and ordering shared by comment listings."""

    limit: int = Field(default=10, gt=0, le=MAX_PAGE_SIZE)
    page: int = Field(default=1, ge=1, le=MAX_PAGE)
    sort_by: SortBy = SortBy.POINTS
    order: SortOrder = SortOrder.DESC
    include_children: bool = False
    user_id: str | None = None  # Current user ID (if authenticated)

    def page_request(self) -> PageRequest:
        return PageRequest(
            limit=self.limit, page=self.page, sort_by=self.sort_by, order=self.order
        )

    def viewer_id(self) -> UserId | None:
        return UserId(self.user_id) if self.user_id else None


class GetCommentsRequest(CommentListParams):
    """Get comments request."""

    post_id: int


class GetCommentsResponse(ResponseModel):
    """One page of comments."""

    comments: list[CommentItem]
    page: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page[CommentView]) -> "GetCommentsResponse":
        return cls(
            comments=[CommentItem.from_view(comment) for comment in page.items],
            page=page.page,
            total_pages=page.total_pages,
        )


class GetCommentsUseCase(BaseUseCase):
    """Use case for listing the top-level comments of a post."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        A post without comments, or one that does not exist, yields an
        empty page.

        Args:
            request: Post ID, pagination and optional caller

        Returns:
            One page of top-level comments with the caller's vote state
        """
        with logfire.span(
            "get_comments.execute",
            post_id=request.post_id,
            include_children=request.include_children,
        ):
            page = await self.comment_service.list_comments(
                CommentScope.top_level(PostId(request.post_id)),
                request.page_request(),
                viewer_id=request.viewer_id(),
                include_children=request.include_children,
            )
            return GetCommentsResponse.from_page(page)
