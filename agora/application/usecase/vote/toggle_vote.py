"""Toggle vote use case."""

import logfire
from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, ResponseModel
from agora.domain.service import UserService, VoteService
from agora.domain.value import CommentId, PostId, UserIdentity, VotableType


class ToggleVoteRequest(BaseModel):
    """Toggle vote request."""

    votable_type: VotableType
    votable_id: int
    user: UserIdentity  # Authenticated caller


class ToggleVoteResponse(ResponseModel):
    """Toggle vote response."""

    votable_type: VotableType
    votable_id: int
    user_id: str
    count: int  # New points total
    is_upvoted: bool


class ToggleVoteUseCase(BaseUseCase):
    """Use case for upvoting a post or comment, or taking the upvote back."""

    def __init__(self, vote_service: VoteService, user_service: UserService) -> None:
        """Initialize toggle vote use case.

        Args:
            vote_service: Vote domain service
            user_service: User domain service
        """
        self.vote_service = vote_service
        self.user_service = user_service

    async def execute(self, request: ToggleVoteRequest) -> ToggleVoteResponse:
        """Execute toggle vote flow.

        Args:
            request: Toggle vote request

        Returns:
            New points total and whether the caller now upvotes the item

        Raises:
            NotFoundError: If the item does not exist
        """
        with logfire.span(
            "toggle_vote.execute",
            votable_type=request.votable_type.value,
            votable_id=request.votable_id,
        ):
            await self.user_service.record_identity(request.user)

            if request.votable_type == VotableType.POST:
                votable_id = PostId(request.votable_id)
            else:
                votable_id = CommentId(request.votable_id)

            toggle = await self.vote_service.toggle_vote(
                request.votable_type, votable_id, request.user.id
            )

            return ToggleVoteResponse(
                votable_type=request.votable_type,
                votable_id=request.votable_id,
                user_id=request.user.id,
                count=toggle.points,
                is_upvoted=toggle.is_upvoted,
            )
