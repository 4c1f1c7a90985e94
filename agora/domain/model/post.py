"""Post aggregate root.

Posts are links, text, or both. Their points and comment counts are
counters maintained by votes and comment creation, never set directly.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from agora.domain.model.common import DomainModel
from agora.domain.model.user import Author
from agora.domain.value import PostId, UserId


class Post(DomainModel):
    """Post aggregate root.

    A post needs a URL, text content, or both.
    """

    id: PostId
    title: str = Field(min_length=1, max_length=300)
    author_id: UserId
    url: Optional[str] = None
    content: Optional[str] = None
    points: int = 0
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def validate_url_or_content(self) -> "Post":
        """Validate that a URL or text content is present."""
        if not self.url and not self.content:
            raise ValueError("URL or content is required")
        return self


class PostView(Post):
    """Post as seen by one viewer, with its author joined."""

    author: Author
    is_upvoted: bool = False
