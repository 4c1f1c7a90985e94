"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from agora.domain.model.post import Post, PostView
from agora.domain.value import PostId, SortBy, SortOrder, UserId


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(
        self, post_id: PostId, for_update: bool = False
    ) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier
            for_update: Lock the row until the transaction ends

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(
        self,
        author_id: UserId,
        title: str,
        url: Optional[str],
        content: Optional[str],
    ) -> Post:
        """Insert a new post with zero points and comments.

        Args:
            author_id: Author user ID
            title: Post title
            url: Linked URL
            content: Text content

        Returns:
            The created post with its assigned ID
        """
        pass

    @abstractmethod
    async def find_view(
        self, post_id: PostId, viewer_id: Optional[UserId] = None
    ) -> Optional[PostView]:
        """Find a post with its author and the viewer's vote state.

        Args:
            post_id: The post ID
            viewer_id: Current user (None for anonymous)

        Returns:
            The post view if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        sort_by: SortBy = SortBy.POINTS,
        order: SortOrder = SortOrder.DESC,
        author: Optional[UserId] = None,
        site: Optional[str] = None,
        viewer_id: Optional[UserId] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[PostView]:
        """Find posts with filtering and pagination.

        Ties on the sort column keep insertion order.

        Args:
            sort_by: Sort column (points or recent)
            order: Sort direction
            author: Only posts by this author
            site: Only posts linking exactly this URL
            viewer_id: Current user (None for anonymous)
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            Post views matching the criteria
        """
        pass

    @abstractmethod
    async def count(
        self,
        author: Optional[UserId] = None,
        site: Optional[str] = None,
    ) -> int:
        """Count distinct posts matching the given filters.

        Args:
            author: Only posts by this author
            site: Only posts linking exactly this URL

        Returns:
            Total number of posts matching the criteria
        """
        pass

    @abstractmethod
    async def add_points(self, post_id: PostId, delta: int) -> Optional[int]:
        """Atomically add ``delta`` to the post's points.

        Uses SQL-level arithmetic to avoid lost updates.

        Args:
            post_id: The post ID
            delta: Signed change

        Returns:
            New points total, or None if the post does not exist
        """
        pass

    @abstractmethod
    async def increment_comment_count(self, post_id: PostId) -> Optional[int]:
        """Atomically increment the post's comment count by 1.

        Args:
            post_id: The post ID

        Returns:
            New comment count, or None if the post does not exist
        """
        pass
