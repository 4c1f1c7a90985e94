"""Domain value objects for Agora.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import Field, model_validator

from agora.domain.value.common import ValueObject
from agora.domain.value.identifiers import CommentId, PostId, UserId


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class SortBy(str, Enum):
    """Column a listing is ordered by."""

    POINTS = "points"
    RECENT = "recent"


class SortOrder(str, Enum):
    """Direction of a listing."""

    ASC = "asc"
    DESC = "desc"


class UserIdentity(ValueObject):
    """The authenticated caller, as supplied by the identity service."""

    id: UserId = Field(min_length=1)
    username: str = Field(min_length=1)


class CommentScopeKind(str, Enum):
    """Which comments a listing covers."""

    POST = "post"  # Top-level comments of a post
    REPLIES = "replies"  # Direct replies of a comment


class CommentScope(ValueObject):
    """Filter selecting the comments of one listing.

    Top-level comments of a post and replies to a comment are distinct
    listings; use the constructors rather than building one by hand.
    """

    kind: CommentScopeKind
    post_id: PostId | None = None
    parent_id: CommentId | None = None

    @model_validator(mode="after")
    def validate_target(self) -> "CommentScope":
        """Ensure exactly the id matching the kind is set."""
        if self.kind == CommentScopeKind.POST and (
            self.post_id is None or self.parent_id is not None
        ):
            raise ValueError("Post scope requires post_id only")
        if self.kind == CommentScopeKind.REPLIES and (
            self.parent_id is None or self.post_id is not None
        ):
            raise ValueError("Replies scope requires parent_id only")
        return self

    @classmethod
    def top_level(cls, post_id: PostId) -> "CommentScope":
        """Top-level comments of a post."""
        return cls(kind=CommentScopeKind.POST, post_id=post_id)

    @classmethod
    def replies(cls, parent_id: CommentId) -> "CommentScope":
        """Direct replies of a comment."""
        return cls(kind=CommentScopeKind.REPLIES, parent_id=parent_id)


# Keeps the row offset well inside BIGINT
MAX_PAGE_SIZE = 100
MAX_PAGE = 100_000


class PageRequest(ValueObject):
    """Pagination, ordering and filters of a listing."""

    limit: int = Field(default=10, gt=0, le=MAX_PAGE_SIZE)
    page: int = Field(default=1, ge=1, le=MAX_PAGE)
    sort_by: SortBy = SortBy.POINTS
    order: SortOrder = SortOrder.DESC
    author: UserId | None = None
    site: str | None = None
