"""Create post use case."""

import logfire
from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, ResponseModel
from agora.domain.service import PostService, UserService
from agora.domain.value import UserIdentity


class CreatePostRequest(BaseModel):
    """Create post request."""

    title: str
    author: UserIdentity  # Authenticated caller
    url: str | None = None
    content: str | None = None


class CreatePostResponse(ResponseModel):
    """Create post response."""

    post_id: int


class CreatePostUseCase(BaseUseCase):
    """Use case for creating a new post."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Steps:
        1. Record the caller so the post can show its author
        2. Validate and insert the post (via PostService)

        Args:
            request: Create post request

        Returns:
            ID of the new post

        Raises:
            ValidationError: If the title is invalid or url and content are
                both missing
        """
        with logfire.span(
            "create_post.execute",
            title=request.title,
            author=request.author.username,
        ):
            await self.user_service.record_identity(request.author)

            post = await self.post_service.create_post(
                author_id=request.author.id,
                title=request.title,
                url=request.url,
                content=request.content,
            )
            return CreatePostResponse(post_id=post.id)
