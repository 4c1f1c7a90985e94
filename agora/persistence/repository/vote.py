"""PostgreSQL implementation of Vote repository."""

from typing import Optional, Union

from sqlalchemy import and_, delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.error import ConflictError
from agora.domain.model import Vote
from agora.domain.repository import VoteRepository
from agora.domain.value import CommentId, PostId, UserId, VotableType
from agora.persistence.mappers import row_to_vote
from agora.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _matches(
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ):
        return and_(
            votes_table.c.user_id == user_id,
            votes_table.c.votable_type == votable_type.value,
            votes_table.c.votable_id == votable_id,
        )

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item."""
        stmt = select(votes_table).where(
            self._matches(user_id, votable_type, votable_id)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def save(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> Vote:
        """Record a vote."""
        stmt = (
            insert(votes_table)
            .values(
                user_id=user_id,
                votable_type=votable_type.value,
                votable_id=votable_id,
            )
            .returning(votes_table)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as e:
            raise ConflictError(
                f"Vote already exists: {votable_type.value} {votable_id}"
            ) from e
        row = result.fetchone()
        await self.session.flush()
        return row_to_vote(row._asdict())

    async def delete_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> bool:
        """Delete a vote by user and votable."""
        stmt = delete(votes_table).where(
            self._matches(user_id, votable_type, votable_id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
