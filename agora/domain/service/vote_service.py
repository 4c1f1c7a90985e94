"""Vote domain service."""

from typing import Union

import logfire

from agora.domain.model.vote import VoteToggle
from agora.domain.repository import TransactionManager, VoteRepository
from agora.domain.value import CommentId, PostId, UserId, VotableType

from .base import Service
from .comment_service import CommentService
from .post_service import PostService


class VoteService(Service):
    """Domain service for upvotes on posts and comments.

    A vote record exists exactly while the user upvotes the item. The item's
    points are the running total and are only ever changed by one here.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_service: PostService,
        comment_service: CommentService,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            post_service: Post domain service (owns post points)
            comment_service: Comment domain service (owns comment points)
            transaction_manager: Transaction boundary for toggles
        """
        self.vote_repository = vote_repository
        self.post_service = post_service
        self.comment_service = comment_service
        self.transaction_manager = transaction_manager

    async def toggle_vote(
        self,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
        user_id: UserId,
    ) -> VoteToggle:
        """Upvote an item, or take the upvote back if it exists.

        The item row stays locked from the existence check until the points
        are updated, so concurrent toggles by the same user serialize.

        Args:
            votable_type: Type of item (post or comment)
            votable_id: ID of the item
            user_id: The voter

        Returns:
            New points total and whether the user now upvotes the item

        Raises:
            NotFoundError: If the item does not exist
        """
        with logfire.span(
            "vote_service.toggle_vote",
            votable_type=votable_type.value,
            votable_id=votable_id,
            user_id=user_id,
        ):
            async with self.transaction_manager.atomic():
                await self._lock(votable_type, votable_id)

                existing = await self.vote_repository.find_by_user_and_votable(
                    user_id, votable_type, votable_id
                )
                if existing:
                    await self.vote_repository.delete_by_user_and_votable(
                        user_id, votable_type, votable_id
                    )
                    delta = -1
                else:
                    await self.vote_repository.save(user_id, votable_type, votable_id)
                    delta = 1

                points = await self._add_points(votable_type, votable_id, delta)

            toggle = VoteToggle(points=points, is_upvoted=delta > 0)
            logfire.info(
                "Vote toggled",
                votable_type=votable_type.value,
                votable_id=votable_id,
                points=toggle.points,
                is_upvoted=toggle.is_upvoted,
            )
            return toggle

    async def _lock(
        self, votable_type: VotableType, votable_id: Union[PostId, CommentId]
    ) -> None:
        if votable_type == VotableType.POST:
            await self.post_service.lock_post(PostId(votable_id))
        else:
            await self.comment_service.lock_comment(CommentId(votable_id))

    async def _add_points(
        self,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
        delta: int,
    ) -> int:
        if votable_type == VotableType.POST:
            return await self.post_service.add_points(PostId(votable_id), delta)
        return await self.comment_service.add_points(CommentId(votable_id), delta)
