"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from agora.domain.model.comment import Comment, CommentView
from agora.domain.value import (
    CommentId,
    CommentScope,
    PostId,
    SortBy,
    SortOrder,
    UserId,
)


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(
        self, comment_id: CommentId, for_update: bool = False
    ) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier
            for_update: Lock the row until the transaction ends

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_id: Optional[CommentId] = None,
        depth: int = 0,
    ) -> Comment:
        """Insert a new comment with zero points and replies.

        Counters of the post and parent are not touched here.

        Args:
            post_id: Owning post
            author_id: Author user ID
            content: Comment text
            parent_id: Parent comment for replies
            depth: Nesting level

        Returns:
            The created comment with its assigned ID
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        scope: CommentScope,
        sort_by: SortBy = SortBy.POINTS,
        order: SortOrder = SortOrder.DESC,
        viewer_id: Optional[UserId] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[CommentView]:
        """Find one page of the comments in a scope.

        Ties on the sort column keep insertion order. Returned views have
        no children attached.

        Args:
            scope: Top-level comments of a post, or replies of a comment
            sort_by: Sort column (points or recent)
            order: Sort direction
            viewer_id: Current user (None for anonymous)
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            Comment views in listing order
        """
        pass

    @abstractmethod
    async def count(self, scope: CommentScope) -> int:
        """Count distinct comments in a scope.

        Args:
            scope: Top-level comments of a post, or replies of a comment

        Returns:
            Number of comments
        """
        pass

    @abstractmethod
    async def find_children(
        self,
        parent_ids: Sequence[CommentId],
        sort_by: SortBy = SortBy.POINTS,
        order: SortOrder = SortOrder.DESC,
        viewer_id: Optional[UserId] = None,
        per_parent: int = 2,
    ) -> Dict[CommentId, List[CommentView]]:
        """Find the first direct replies of several comments at once.

        Args:
            parent_ids: Comments whose replies are wanted
            sort_by: Sort column (points or recent)
            order: Sort direction
            viewer_id: Current user (None for anonymous)
            per_parent: Maximum replies returned per parent

        Returns:
            Mapping of parent ID to its replies in listing order; parents
            without replies are absent
        """
        pass

    @abstractmethod
    async def add_points(self, comment_id: CommentId, delta: int) -> Optional[int]:
        """Atomically add ``delta`` to the comment's points.

        Args:
            comment_id: The comment ID
            delta: Signed change

        Returns:
            New points total, or None if the comment does not exist
        """
        pass

    @abstractmethod
    async def increment_comment_count(self, comment_id: CommentId) -> Optional[int]:
        """Atomically increment the comment's reply count by 1.

        Args:
            comment_id: The comment ID

        Returns:
            New reply count, or None if the comment does not exist
        """
        pass
