"""Domain services for Agora."""

from .base import Service
from .comment_service import CommentService
from .identity_service import IdentityService
from .pagination import Page, PageWindow, paginate, sort_records
from .post_service import PostService
from .user_service import UserService
from .vote_service import VoteService

__all__ = [
    "CommentService",
    "IdentityService",
    "Page",
    "PageWindow",
    "PostService",
    "Service",
    "UserService",
    "VoteService",
    "paginate",
    "sort_records",
]
