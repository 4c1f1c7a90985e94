"""In-memory post repository for testing."""

from typing import List, Optional

from agora.domain.model.post import Post, PostView
from agora.domain.model.user import Author
from agora.domain.repository.post import PostRepository
from agora.domain.service.pagination import sort_records
from agora.domain.value import PostId, SortBy, SortOrder, UserId, VotableType

from .database import InMemoryDatabase


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, database: InMemoryDatabase | None = None) -> None:
        self.database = database or InMemoryDatabase()

    def _view(self, post: Post, viewer_id: Optional[UserId]) -> PostView:
        return PostView(
            **post.model_dump(),
            author=Author(
                id=post.author_id,
                username=self.database.username_of(post.author_id),
            ),
            is_upvoted=self.database.has_vote(viewer_id, VotableType.POST, post.id),
        )

    def _matching(self, author: Optional[UserId], site: Optional[str]) -> List[Post]:
        posts = list(self.database.posts.values())
        if author is not None:
            posts = [p for p in posts if p.author_id == author]
        if site is not None:
            posts = [p for p in posts if p.url == site]
        return posts

    async def find_by_id(
        self, post_id: PostId, for_update: bool = False
    ) -> Optional[Post]:
        """Find a post by ID."""
        return self.database.posts.get(post_id)

    async def create(
        self,
        author_id: UserId,
        title: str,
        url: Optional[str],
        content: Optional[str],
    ) -> Post:
        """Insert a new post."""
        post = Post(
            id=PostId(next(self.database.post_ids)),
            title=title,
            author_id=author_id,
            url=url,
            content=content,
        )
        self.database.posts[post.id] = post
        return post

    async def find_view(
        self, post_id: PostId, viewer_id: Optional[UserId] = None
    ) -> Optional[PostView]:
        """Find a post with its author and the viewer's vote state."""
        post = self.database.posts.get(post_id)
        return self._view(post, viewer_id) if post else None

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
        """Find posts with filtering and pagination."""
        posts = sort_records(self._matching(author, site), sort_by, order)
        return [self._view(p, viewer_id) for p in posts[offset : offset + limit]]

    async def count(
        self,
        author: Optional[UserId] = None,
        site: Optional[str] = None,
    ) -> int:
        """Count posts matching the given filters."""
        return len(self._matching(author, site))

    async def add_points(self, post_id: PostId, delta: int) -> Optional[int]:
        """Add ``delta`` to points."""
        post = self.database.posts.get(post_id)
        if post is None:
            return None
        updated = post.model_copy(update={"points": post.points + delta})
        self.database.posts[post_id] = updated
        return updated.points

    async def increment_comment_count(self, post_id: PostId) -> Optional[int]:
        """Increment the comment count by 1."""
        post = self.database.posts.get(post_id)
        if post is None:
            return None
        updated = post.model_copy(update={"comment_count": post.comment_count + 1})
        self.database.posts[post_id] = updated
        return updated.comment_count
