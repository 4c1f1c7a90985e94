"""Domain value objects for Agora."""

from agora.domain.value.identifiers import CommentId, PostId, UserId, VoteId
from agora.domain.value.types import (
    MAX_PAGE,
    MAX_PAGE_SIZE,
    CommentScope,
    CommentScopeKind,
    PageRequest,
    SortBy,
    SortOrder,
    UserIdentity,
    VotableType,
)

__all__ = [
    # Identifiers
    "PostId",
    "CommentId",
    "VoteId",
    "UserId",
    # Types
    "MAX_PAGE",
    "MAX_PAGE_SIZE",
    "CommentScope",
    "CommentScopeKind",
    "PageRequest",
    "SortBy",
    "SortOrder",
    "UserIdentity",
    "VotableType",
]
