"""Comment entity.

Comments form a forest under each post. Every comment stores its parent's
id (None for top-level comments) and its depth, so trees are read with
bounded queries instead of recursive walks.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.model.user import Author
from agora.domain.value import CommentId, PostId, UserId

MIN_CONTENT_LENGTH = 3


class Comment(DomainModel):
    """Comment entity.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - depth: Nesting level (0 for top-level, parent depth + 1 for replies)
    - comment_count: Number of direct replies
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    content: str = Field(min_length=MIN_CONTENT_LENGTH)
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)
    points: int = 0
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ViewerVote(DomainModel):
    """A viewer's vote on a comment."""

    user_id: UserId


class CommentView(Comment):
    """Comment as seen by one viewer.

    ``comment_upvotes`` holds the viewer's vote when there is one and is
    empty otherwise. ``child_comments`` is only filled when a listing asks
    for children, and then holds at most a few direct replies.
    """

    author: Author
    comment_upvotes: list[ViewerVote] = Field(default_factory=list, max_length=1)
    child_comments: list["CommentView"] = Field(default_factory=list)
