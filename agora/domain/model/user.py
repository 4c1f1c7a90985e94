"""User projection.

Users are owned by the identity service. Agora keeps the id and username
of every author it has seen so listings can join them.
"""

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import UserId


class User(DomainModel):
    """Author of posts and comments."""

    id: UserId
    username: str = Field(min_length=1)


class Author(DomainModel):
    """Author projection attached to post and comment views.

    ``username`` is None when the author has no stored user row.
    """

    id: UserId
    username: str | None = None
