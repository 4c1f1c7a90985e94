"""Domain model entities for Agora."""

from agora.domain.model.comment import Comment, CommentView, ViewerVote
from agora.domain.model.post import Post, PostView
from agora.domain.model.user import Author, User
from agora.domain.model.vote import Vote, VoteToggle

__all__ = [
    "Author",
    "Comment",
    "CommentView",
    "Post",
    "PostView",
    "User",
    "ViewerVote",
    "Vote",
    "VoteToggle",
]
