"""Create comment use case."""

import logfire
from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, ResponseModel
from agora.application.usecase.comment.get_comments import CommentItem
from agora.application.usecase.post.get_post import AuthorItem
from agora.domain.service import CommentService, UserService
from agora.domain.value import CommentId, PostId, UserIdentity


class CreateCommentRequest(BaseModel):
    """Create comment request.

    Exactly one target is normally given: ``post_id`` for a top-level
    comment or ``parent_id`` for a reply.
    """

    content: str
    author: UserIdentity  # Authenticated caller
    post_id: int | None = None
    parent_id: int | None = None  # Parent comment ID for replies


class CreateCommentResponse(ResponseModel):
    """Create comment response."""

    comment: CommentItem


class CreateCommentUseCase(BaseUseCase):
    """Use case for creating a comment on a post or replying to another comment."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            user_service: User domain service
        """
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Record the caller so the comment can show its author
        2. Create the comment and bump the post and parent counters
           (via CommentService, all-or-nothing)

        Args:
            request: Create comment request

        Returns:
            The new comment, without votes or children

        Raises:
            ValidationError: If content is too short or no target is given
            NotFoundError: If the post or parent comment does not exist
        """
        with logfire.span(
            "create_comment.execute",
            post_id=request.post_id,
            parent_id=request.parent_id,
        ):
            user = await self.user_service.record_identity(request.author)

            comment = await self.comment_service.record_comment(
                author_id=user.id,
                content=request.content,
                post_id=PostId(request.post_id) if request.post_id is not None else None,
                parent_id=(
                    CommentId(request.parent_id)
                    if request.parent_id is not None
                    else None
                ),
            )

            item = CommentItem.from_view(comment)
            item.author = AuthorItem(id=user.id, username=user.username)
            return CreateCommentResponse(comment=item)
