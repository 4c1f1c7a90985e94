"""Get post use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, ResponseModel
from agora.domain.model.post import PostView
from agora.domain.service import PostService
from agora.domain.value import PostId, UserId


class AuthorItem(ResponseModel):
    """Author of a post or comment."""

    id: str
    username: str | None


class PostItem(ResponseModel):
    """Post as returned to API clients."""

    id: int
    title: str
    url: str | None
    content: str | None
    points: int
    created_at: datetime
    comment_count: int
    author: AuthorItem
    is_upvoted: bool

    @classmethod
    def from_view(cls, post: PostView) -> "PostItem":
        return cls(
            id=post.id,
            title=post.title,
            url=post.url,
            content=post.content,
            points=post.points,
            created_at=post.created_at,
            comment_count=post.comment_count,
            author=AuthorItem(id=post.author.id, username=post.author.username),
            is_upvoted=post.is_upvoted,
        )


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: int
    user_id: str | None = None  # Current user ID (if authenticated)


class GetPostResponse(ResponseModel):
    """Get post response."""

    post: PostItem


class GetPostUseCase(BaseUseCase):
    """Use case for fetching a single post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Args:
            request: Get post request

        Returns:
            The post with the caller's vote state

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span("get_post.execute", post_id=request.post_id):
            viewer_id = UserId(request.user_id) if request.user_id else None
            post = await self.post_service.get_post(PostId(request.post_id), viewer_id)
            return GetPostResponse(post=PostItem.from_view(post))
