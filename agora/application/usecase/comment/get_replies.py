"""Get replies use case."""

import logfire

from agora.application.usecase.base import BaseUseCase
from agora.application.usecase.comment.get_comments import (
    CommentListParams,
    GetCommentsResponse,
)
from agora.domain.service import CommentService
from agora.domain.value import CommentId, CommentScope


class GetRepliesRequest(CommentListParams):
    """Get replies request."""

    comment_id: int


class GetRepliesUseCase(BaseUseCase):
    """Use case for listing the direct replies of a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get replies use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetRepliesRequest) -> GetCommentsResponse:
        """Execute get replies flow.

        Args:
            request: Comment ID, pagination and optional caller

        Returns:
            One page of replies with the caller's vote state
        """
        with logfire.span("get_replies.execute", comment_id=request.comment_id):
            page = await self.comment_service.list_comments(
                CommentScope.replies(CommentId(request.comment_id)),
                request.page_request(),
                viewer_id=request.viewer_id(),
                include_children=request.include_children,
            )
            return GetCommentsResponse.from_page(page)
