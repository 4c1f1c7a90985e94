"""Comment domain service."""

import logfire

from agora.config import PaginationSettings
from agora.domain.error import NotFoundError, ValidationError
from agora.domain.model.comment import MIN_CONTENT_LENGTH, Comment, CommentView
from agora.domain.model.user import Author
from agora.domain.repository import CommentRepository, TransactionManager
from agora.domain.value import CommentId, CommentScope, PageRequest, PostId, UserId

from .base import Service
from .pagination import Page, paginate
from .post_service import PostService


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_service: PostService,
        transaction_manager: TransactionManager,
        pagination_settings: PaginationSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_service: Post domain service (owns post counters)
            transaction_manager: Transaction boundary for comment creation
            pagination_settings: Listing defaults (reply preview size)
        """
        self.comment_repository = comment_repository
        self.post_service = post_service
        self.transaction_manager = transaction_manager
        self.child_preview_limit = pagination_settings.child_preview_limit

    async def record_comment(
        self,
        author_id: UserId,
        content: str,
        post_id: PostId | None = None,
        parent_id: CommentId | None = None,
    ) -> CommentView:
        """Create a comment on a post or a reply to another comment.

        Steps, all-or-nothing:
        1. For replies, load the parent; its post wins over ``post_id``,
           depth is parent depth + 1, and the parent's reply count goes up
        2. Increment the owning post's comment count
        3. Insert the comment

        Args:
            author_id: Author user ID
            content: Comment text
            post_id: Post for top-level comments
            parent_id: Parent comment for replies

        Returns:
            Created comment with no votes and no children

        Raises:
            ValidationError: If content is too short or no target is given
            NotFoundError: If the parent comment or post does not exist
        """
        if len(content) < MIN_CONTENT_LENGTH:
            raise ValidationError(
                f"Content must be at least {MIN_CONTENT_LENGTH} characters"
            )
        if post_id is None and parent_id is None:
            raise ValidationError("A post or parent comment is required")

        with logfire.span(
            "comment_service.record_comment",
            post_id=post_id,
            parent_id=parent_id,
            author_id=author_id,
        ):
            async with self.transaction_manager.atomic():
                depth = 0
                if parent_id is not None:
                    parent = await self.comment_repository.find_by_id(
                        parent_id, for_update=True
                    )
                    if not parent:
                        logfire.warn("Parent comment not found", parent_id=parent_id)
                        raise NotFoundError("Comment", parent_id)
                    post_id = parent.post_id
                    depth = parent.depth + 1

                    replies = await self.comment_repository.increment_comment_count(
                        parent_id
                    )
                    if replies is None:
                        raise NotFoundError("Comment", parent_id)

                await self.post_service.increment_comment_count(post_id)

                comment = await self.comment_repository.create(
                    post_id=post_id,
                    author_id=author_id,
                    content=content,
                    parent_id=parent_id,
                    depth=depth,
                )

            logfire.info(
                "Comment created",
                comment_id=comment.id,
                post_id=post_id,
                depth=depth,
            )
            return await self._as_new_view(comment)

    async def list_comments(
        self,
        scope: CommentScope,
        request: PageRequest,
        viewer_id: UserId | None = None,
        include_children: bool = False,
    ) -> Page[CommentView]:
        """List one page of comments in a scope.

        Args:
            scope: Top-level comments of a post, or replies of a comment
            request: Pagination and ordering (author/site filters ignored)
            viewer_id: Current user (None for anonymous)
            include_children: Attach the first few replies of each comment

        Returns:
            Page of comment views
        """
        with logfire.span(
            "comment_service.list_comments",
            scope=scope.kind.value,
            post_id=scope.post_id,
            parent_id=scope.parent_id,
            page=request.page,
            limit=request.limit,
            include_children=include_children,
        ):
            total = await self.comment_repository.count(scope)
            window = paginate(total, request.limit, request.page)

            comments = await self.comment_repository.find_all(
                scope,
                sort_by=request.sort_by,
                order=request.order,
                viewer_id=viewer_id,
                limit=request.limit,
                offset=window.offset,
            )

            if include_children and comments and self.child_preview_limit > 0:
                children = await self.comment_repository.find_children(
                    [comment.id for comment in comments],
                    sort_by=request.sort_by,
                    order=request.order,
                    viewer_id=viewer_id,
                    per_parent=self.child_preview_limit,
                )
                comments = [
                    comment.model_copy(
                        update={"child_comments": children.get(comment.id, [])}
                    )
                    for comment in comments
                ]

            logfire.info("Comments listed", count=len(comments), total=total)
            return Page(
                items=comments, page=request.page, total_pages=window.total_pages
            )

    async def lock_comment(self, comment_id: CommentId) -> Comment:
        """Load a comment and lock it for the rest of the transaction.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.comment_repository.find_by_id(comment_id, for_update=True)
        if not comment:
            raise NotFoundError("Comment", comment_id)
        return comment

    async def add_points(self, comment_id: CommentId, delta: int) -> int:
        """Atomically change comment points.

        Args:
            comment_id: Comment ID
            delta: Signed change

        Returns:
            New points total

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_service.add_points", comment_id=comment_id, delta=delta
        ):
            points = await self.comment_repository.add_points(comment_id, delta)
            if points is None:
                raise NotFoundError("Comment", comment_id)
            logfire.info("Comment points changed", comment_id=comment_id, points=points)
            return points

    async def _as_new_view(self, comment: Comment) -> CommentView:
        """Wrap a fresh comment in a view for its author."""
        return CommentView(
            **comment.model_dump(),
            author=Author(id=comment.author_id),
        )
