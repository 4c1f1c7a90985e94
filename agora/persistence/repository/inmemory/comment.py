"""In-memory comment repository for testing."""

from typing import Dict, List, Optional, Sequence

from agora.domain.model.comment import Comment, CommentView, ViewerVote
from agora.domain.model.user import Author
from agora.domain.repository.comment import CommentRepository
from agora.domain.service.pagination import sort_records
from agora.domain.value import (
    CommentId,
    CommentScope,
    CommentScopeKind,
    PostId,
    SortBy,
    SortOrder,
    UserId,
    VotableType,
)

from .database import InMemoryDatabase


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, database: InMemoryDatabase | None = None) -> None:
        self.database = database or InMemoryDatabase()

    def _view(self, comment: Comment, viewer_id: Optional[UserId]) -> CommentView:
        voted = self.database.has_vote(viewer_id, VotableType.COMMENT, comment.id)
        return CommentView(
            **comment.model_dump(),
            author=Author(
                id=comment.author_id,
                username=self.database.username_of(comment.author_id),
            ),
            comment_upvotes=[ViewerVote(user_id=viewer_id)] if voted else [],
        )

    def _in_scope(self, scope: CommentScope) -> List[Comment]:
        comments = self.database.comments.values()
        if scope.kind == CommentScopeKind.POST:
            return [
                c
                for c in comments
                if c.post_id == scope.post_id and c.parent_id is None
            ]
        return [c for c in comments if c.parent_id == scope.parent_id]

    async def find_by_id(
        self, comment_id: CommentId, for_update: bool = False
    ) -> Optional[Comment]:
        """Find a comment by ID."""
        return self.database.comments.get(comment_id)

    async def create(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_id: Optional[CommentId] = None,
        depth: int = 0,
    ) -> Comment:
        """Insert a new comment."""
        comment = Comment(
            id=CommentId(next(self.database.comment_ids)),
            post_id=post_id,
            author_id=author_id,
            content=content,
            parent_id=parent_id,
            depth=depth,
        )
        self.database.comments[comment.id] = comment
        return comment

    async def find_all(
        self,
        scope: CommentScope,
        sort_by: SortBy = SortBy.POINTS,
        order: SortOrder = SortOrder.DESC,
        viewer_id: Optional[UserId] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[CommentView]:
        """Find one page of the comments in a scope."""
        comments = sort_records(self._in_scope(scope), sort_by, order)
        return [self._view(c, viewer_id) for c in comments[offset : offset + limit]]

    async def count(self, scope: CommentScope) -> int:
        """Count comments in a scope."""
        return len(self._in_scope(scope))

    async def find_children(
        self,
        parent_ids: Sequence[CommentId],
        sort_by: SortBy = SortBy.POINTS,
        order: SortOrder = SortOrder.DESC,
        viewer_id: Optional[UserId] = None,
        per_parent: int = 2,
    ) -> Dict[CommentId, List[CommentView]]:
        """Find the first direct replies of several comments."""
        children: Dict[CommentId, List[CommentView]] = {}
        if per_parent <= 0:
            return children
        for parent_id in parent_ids:
            replies = sort_records(
                self._in_scope(CommentScope.replies(parent_id)), sort_by, order
            )
            if replies:
                children[parent_id] = [
                    self._view(c, viewer_id) for c in replies[:per_parent]
                ]
        return children

    async def add_points(self, comment_id: CommentId, delta: int) -> Optional[int]:
        """Add ``delta`` to points."""
        comment = self.database.comments.get(comment_id)
        if comment is None:
            return None
        updated = comment.model_copy(update={"points": comment.points + delta})
        self.database.comments[comment_id] = updated
        return updated.points

    async def increment_comment_count(self, comment_id: CommentId) -> Optional[int]:
        """Increment the reply count by 1."""
        comment = self.database.comments.get(comment_id)
        if comment is None:
            return None
        updated = comment.model_copy(
            update={"comment_count": comment.comment_count + 1}
        )
        self.database.comments[comment_id] = updated
        return updated.comment_count
