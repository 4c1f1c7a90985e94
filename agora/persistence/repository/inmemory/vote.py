"""In-memory vote repository for testing."""

from typing import Optional, Union

from agora.domain.error import ConflictError
from agora.domain.model.vote import Vote
from agora.domain.repository.vote import VoteRepository
from agora.domain.value import CommentId, PostId, UserId, VotableType, VoteId

from .database import InMemoryDatabase


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, database: InMemoryDatabase | None = None) -> None:
        self.database = database or InMemoryDatabase()

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> Optional[Vote]:
        """Find a vote by user and votable item."""
        return self.database.votes.get((user_id, votable_type, votable_id))

    async def save(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> Vote:
        """Record a vote (enforces the one-vote-per-item constraint)."""
        key = (user_id, votable_type, votable_id)
        if key in self.database.votes:
            raise ConflictError(
                f"Vote already exists: {votable_type.value} {votable_id}"
            )
        vote = Vote(
            id=VoteId(next(self.database.vote_ids)),
            user_id=user_id,
            votable_type=votable_type,
            votable_id=votable_id,
        )
        self.database.votes[key] = vote
        return vote

    async def delete_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> bool:
        """Delete a vote by user and votable."""
        return (
            self.database.votes.pop((user_id, votable_type, votable_id), None)
            is not None
        )
