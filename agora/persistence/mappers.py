"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.

View queries add a few joined columns on top of the entity columns:
``author_username`` for every view, ``is_upvoted`` for posts and
``viewer_vote_user_id`` for comments.
"""

from typing import Any, Dict

from agora.domain.model import (
    Author,
    Comment,
    CommentView,
    Post,
    PostView,
    User,
    ViewerVote,
    Vote,
)
from agora.domain.value import CommentId, PostId, UserId, VotableType, VoteId


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(id=UserId(row["id"]), username=row["username"])


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(row["id"]),
        title=row["title"],
        author_id=UserId(row["author_id"]),
        url=row.get("url"),
        content=row.get("content"),
        points=row["points"],
        comment_count=row["comment_count"],
        created_at=row["created_at"],
    )


def row_to_post_view(row: Dict[str, Any]) -> PostView:
    """Convert a joined post row to a PostView.

    Args:
        row: Post columns plus ``author_username`` and ``is_upvoted``

    Returns:
        PostView domain model
    """
    post = row_to_post(row)
    return PostView(
        **post.model_dump(),
        author=Author(id=post.author_id, username=row.get("author_username")),
        is_upvoted=bool(row.get("is_upvoted")),
    )


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(row["id"]),
        post_id=PostId(row["post_id"]),
        author_id=UserId(row["author_id"]),
        content=row["content"],
        parent_id=(
            CommentId(row["parent_id"]) if row.get("parent_id") is not None else None
        ),
        depth=row["depth"],
        comment_count=row["comment_count"],
        points=row["points"],
        created_at=row["created_at"],
    )


def row_to_comment_view(row: Dict[str, Any]) -> CommentView:
    """Convert a joined comment row to a CommentView.

    Args:
        row: Comment columns plus ``author_username`` and
            ``viewer_vote_user_id`` (NULL when the viewer has not voted)

    Returns:
        CommentView domain model without children
    """
    comment = row_to_comment(row)
    voter = row.get("viewer_vote_user_id")
    return CommentView(
        **comment.model_dump(),
        author=Author(id=comment.author_id, username=row.get("author_username")),
        comment_upvotes=[ViewerVote(user_id=UserId(voter))] if voter else [],
    )


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(row["id"]),
        user_id=UserId(row["user_id"]),
        votable_type=VotableType(row["votable_type"]),
        votable_id=row["votable_id"],
        created_at=row["created_at"],
    )
