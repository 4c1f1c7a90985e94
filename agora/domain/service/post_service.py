"""Post domain service."""

import logfire

from agora.domain.error import NotFoundError, ValidationError
from agora.domain.model.post import Post, PostView
from agora.domain.repository import PostRepository
from agora.domain.value import PageRequest, PostId, UserId

from .base import Service
from .pagination import Page, paginate

MAX_TITLE_LENGTH = 300


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def create_post(
        self,
        author_id: UserId,
        title: str,
        url: str | None = None,
        content: str | None = None,
    ) -> Post:
        """Create a post.

        Empty strings count as missing.

        Args:
            author_id: Author user ID
            title: Post title
            url: Linked URL
            content: Text content

        Returns:
            Created post

        Raises:
            ValidationError: If the title is invalid or both url and
                content are missing
        """
        url = url or None
        content = content or None
        with logfire.span(
            "post_service.create_post", author_id=author_id, title=title
        ):
            if not title or len(title) > MAX_TITLE_LENGTH:
                raise ValidationError(
                    f"Title must be 1-{MAX_TITLE_LENGTH} characters"
                )
            if url is None and content is None:
                logfire.warn("Post without url or content", author_id=author_id)
                raise ValidationError("URL or content is required")

            post = await self.post_repository.create(
                author_id=author_id, title=title, url=url, content=content
            )
            logfire.info("Post created", post_id=post.id, author_id=author_id)
            return post

    async def get_post(
        self, post_id: PostId, viewer_id: UserId | None = None
    ) -> PostView:
        """Get a post as seen by a viewer.

        Args:
            post_id: Post ID
            viewer_id: Current user (None for anonymous)

        Returns:
            Post view

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span("post_service.get_post", post_id=post_id):
            post = await self.post_repository.find_view(post_id, viewer_id)
            if not post:
                logfire.warn("Post not found", post_id=post_id)
                raise NotFoundError("Post", post_id)
            return post

    async def list_posts(
        self, request: PageRequest, viewer_id: UserId | None = None
    ) -> Page[PostView]:
        """List one page of posts.

        Args:
            request: Pagination, ordering and filters
            viewer_id: Current user (None for anonymous)

        Returns:
            Page of post views
        """
        with logfire.span(
            "post_service.list_posts",
            sort_by=request.sort_by.value,
            order=request.order.value,
            page=request.page,
            limit=request.limit,
            author=request.author,
            site=request.site,
        ):
            total = await self.post_repository.count(
                author=request.author, site=request.site
            )
            window = paginate(total, request.limit, request.page)

            posts = await self.post_repository.find_all(
                sort_by=request.sort_by,
                order=request.order,
                author=request.author,
                site=request.site,
                viewer_id=viewer_id,
                limit=request.limit,
                offset=window.offset,
            )

            logfire.info("Posts listed", count=len(posts), total=total)
            return Page(
                items=posts, page=request.page, total_pages=window.total_pages
            )

    async def lock_post(self, post_id: PostId) -> Post:
        """Load a post and lock it for the rest of the transaction.

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self.post_repository.find_by_id(post_id, for_update=True)
        if not post:
            raise NotFoundError("Post", post_id)
        return post

    async def add_points(self, post_id: PostId, delta: int) -> int:
        """Atomically change post points.

        Args:
            post_id: Post ID
            delta: Signed change

        Returns:
            New points total

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span("post_service.add_points", post_id=post_id, delta=delta):
            points = await self.post_repository.add_points(post_id, delta)
            if points is None:
                raise NotFoundError("Post", post_id)
            logfire.info("Post points changed", post_id=post_id, points=points)
            return points

    async def increment_comment_count(self, post_id: PostId) -> int:
        """Atomically increment a post's comment count.

        Args:
            post_id: Post ID

        Returns:
            New comment count

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span("post_service.increment_comment_count", post_id=post_id):
            count = await self.post_repository.increment_comment_count(post_id)
            if count is None:
                logfire.error(
                    "Post not found for comment count increment", post_id=post_id
                )
                raise NotFoundError("Post", post_id)
            logfire.info(
                "Comment count incremented", post_id=post_id, new_count=count
            )
            return count
