"""Vote entity.

A vote exists while a user upvotes a post or comment; removing the vote
deletes the record. There is no downvote and no vote history.
"""

from datetime import datetime, timezone
from typing import Union

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import CommentId, PostId, UserId, VotableType, VoteId


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per item (enforced by database unique constraint)
    - Polymorphic reference to votable (post or comment)
    """

    id: VoteId
    user_id: UserId
    votable_type: VotableType
    votable_id: Union[PostId, CommentId]
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class VoteToggle(DomainModel):
    """Outcome of toggling a vote."""

    points: int
    is_upvoted: bool
