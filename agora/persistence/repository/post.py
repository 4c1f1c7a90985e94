"""PostgreSQL implementation of Post repository."""

from typing import List, Optional

import logfire
from sqlalchemy import Select, and_, false, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Post, PostView
from agora.domain.repository import PostRepository
from agora.domain.value import PostId, SortBy, SortOrder, UserId, VotableType
from agora.persistence.mappers import row_to_post, row_to_post_view
from agora.persistence.ordering import order_by_clauses
from agora.persistence.tables import posts_table, users_table, votes_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _view_query(self, viewer_id: Optional[UserId]) -> Select:
        """Select posts with their author and the viewer's vote state.

        Anonymous viewers skip the vote join entirely.
        """
        source = posts_table.outerjoin(
            users_table, posts_table.c.author_id == users_table.c.id
        )
        if viewer_id is None:
            is_upvoted = false().label("is_upvoted")
        else:
            source = source.outerjoin(
                votes_table,
                and_(
                    votes_table.c.votable_type == VotableType.POST.value,
                    votes_table.c.votable_id == posts_table.c.id,
                    votes_table.c.user_id == viewer_id,
                ),
            )
            is_upvoted = votes_table.c.id.is_not(None).label("is_upvoted")

        return select(
            posts_table,
            users_table.c.username.label("author_username"),
            is_upvoted,
        ).select_from(source)

    @staticmethod
    def _filtered(
        stmt: Select, author: Optional[UserId], site: Optional[str]
    ) -> Select:
        if author is not None:
            stmt = stmt.where(posts_table.c.author_id == author)
        if site is not None:
            stmt = stmt.where(posts_table.c.url == site)
        return stmt

    async def find_by_id(
        self, post_id: PostId, for_update: bool = False
    ) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span(
            "post_repository.find_by_id", post_id=post_id, for_update=for_update
        ):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            if for_update:
                stmt = stmt.with_for_update()
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Post not found", post_id=post_id)
                return None
            return row_to_post(row._asdict())

    async def create(
        self,
        author_id: UserId,
        title: str,
        url: Optional[str],
        content: Optional[str],
    ) -> Post:
        """Insert a new post."""
        with logfire.span("post_repository.create", author_id=author_id, title=title):
            stmt = (
                insert(posts_table)
                .values(author_id=author_id, title=title, url=url, content=content)
                .returning(posts_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            await self.session.flush()
            return row_to_post(row._asdict())

    async def find_view(
        self, post_id: PostId, viewer_id: Optional[UserId] = None
    ) -> Optional[PostView]:
        """Find a post with its author and the viewer's vote state."""
        stmt = self._view_query(viewer_id).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post_view(row._asdict()) if row else None

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
        with logfire.span(
            "post_repository.find_all",
            sort_by=sort_by.value,
            order=order.value,
            author=author,
            site=site,
            limit=limit,
            offset=offset,
        ):
            stmt = self._filtered(self._view_query(viewer_id), author, site)
            stmt = (
                stmt.order_by(*order_by_clauses(posts_table, sort_by, order))
                .limit(limit)
                .offset(offset)
            )

            result = await self.session.execute(stmt)
            posts = [row_to_post_view(row._asdict()) for row in result.fetchall()]

            logfire.info("Found posts", count=len(posts))
            return posts

    async def count(
        self,
        author: Optional[UserId] = None,
        site: Optional[str] = None,
    ) -> int:
        """Count distinct posts matching the given filters."""
        with logfire.span("post_repository.count", author=author, site=site):
            stmt = select(func.count(func.distinct(posts_table.c.id))).select_from(
                posts_table
            )
            stmt = self._filtered(stmt, author, site)

            result = await self.session.execute(stmt)
            count = result.scalar() or 0
            logfire.info("Post count", count=count)
            return count

    async def add_points(self, post_id: PostId, delta: int) -> Optional[int]:
        """Atomically add ``delta`` to points."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(points=posts_table.c.points + delta)
            .returning(posts_table.c.points)
        )
        result = await self.session.execute(stmt)
        points = result.scalar_one_or_none()
        await self.session.flush()
        return points

    async def increment_comment_count(self, post_id: PostId) -> Optional[int]:
        """Atomically increment the comment count by 1."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(comment_count=posts_table.c.comment_count + 1)
            .returning(posts_table.c.comment_count)
        )
        result = await self.session.execute(stmt)
        count = result.scalar_one_or_none()
        await self.session.flush()
        return count
