"""PostgreSQL implementation of Comment repository."""

from collections import defaultdict
from typing import Dict, List, Optional, Sequence

import logfire
from sqlalchemy import Select, and_, func, insert, null, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Comment, CommentView
from agora.domain.repository import CommentRepository
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
from agora.persistence.mappers import row_to_comment, row_to_comment_view
from agora.persistence.ordering import order_by_clauses
from agora.persistence.tables import comments_table, users_table, votes_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _view_query(self, viewer_id: Optional[UserId]) -> Select:
        """Select comments with their author and the viewer's vote.

        Anonymous viewers skip the vote join entirely.
        """
        source = comments_table.outerjoin(
            users_table, comments_table.c.author_id == users_table.c.id
        )
        if viewer_id is None:
            voter = null().label("viewer_vote_user_id")
        else:
            source = source.outerjoin(
                votes_table,
                and_(
                    votes_table.c.votable_type == VotableType.COMMENT.value,
                    votes_table.c.votable_id == comments_table.c.id,
                    votes_table.c.user_id == viewer_id,
                ),
            )
            voter = votes_table.c.user_id.label("viewer_vote_user_id")

        return select(
            comments_table,
            users_table.c.username.label("author_username"),
            voter,
        ).select_from(source)

    @staticmethod
    def _in_scope(stmt: Select, scope: CommentScope) -> Select:
        if scope.kind == CommentScopeKind.POST:
            return stmt.where(
                comments_table.c.post_id == scope.post_id,
                comments_table.c.parent_id.is_(None),
            )
        return stmt.where(comments_table.c.parent_id == scope.parent_id)

    async def find_by_id(
        self, comment_id: CommentId, for_update: bool = False
    ) -> Optional[Comment]:
        """Find a comment by ID."""
        with logfire.span(
            "comment_repository.find_by_id",
            comment_id=comment_id,
            for_update=for_update,
        ):
            stmt = select(comments_table).where(comments_table.c.id == comment_id)
            if for_update:
                stmt = stmt.with_for_update()
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Comment not found", comment_id=comment_id)
                return None
            return row_to_comment(row._asdict())

    async def create(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_id: Optional[CommentId] = None,
        depth: int = 0,
    ) -> Comment:
        """Insert a new comment."""
        with logfire.span(
            "comment_repository.create",
            post_id=post_id,
            parent_id=parent_id,
            depth=depth,
        ):
            stmt = (
                insert(comments_table)
                .values(
                    post_id=post_id,
                    author_id=author_id,
                    content=content,
                    parent_id=parent_id,
                    depth=depth,
                )
                .returning(comments_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            await self.session.flush()
            return row_to_comment(row._asdict())

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
        with logfire.span(
            "comment_repository.find_all",
            scope=scope.kind.value,
            sort_by=sort_by.value,
            order=order.value,
            limit=limit,
            offset=offset,
        ):
            stmt = self._in_scope(self._view_query(viewer_id), scope)
            stmt = (
                stmt.order_by(*order_by_clauses(comments_table, sort_by, order))
                .limit(limit)
                .offset(offset)
            )

            result = await self.session.execute(stmt)
            comments = [row_to_comment_view(row._asdict()) for row in result.fetchall()]

            logfire.info("Found comments", count=len(comments))
            return comments

    async def count(self, scope: CommentScope) -> int:
        """Count distinct comments in a scope."""
        stmt = select(func.count(func.distinct(comments_table.c.id))).select_from(
            comments_table
        )
        stmt = self._in_scope(stmt, scope)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_children(
        self,
        parent_ids: Sequence[CommentId],
        sort_by: SortBy = SortBy.POINTS,
        order: SortOrder = SortOrder.DESC,
        viewer_id: Optional[UserId] = None,
        per_parent: int = 2,
    ) -> Dict[CommentId, List[CommentView]]:
        """Find the first direct replies of several comments in one query.

        Replies are ranked per parent with ``row_number()`` so each parent
        contributes at most ``per_parent`` rows.
        """
        if not parent_ids or per_parent <= 0:
            return {}

        with logfire.span(
            "comment_repository.find_children",
            parents=len(parent_ids),
            per_parent=per_parent,
        ):
            rank = (
                func.row_number()
                .over(
                    partition_by=comments_table.c.parent_id,
                    order_by=order_by_clauses(comments_table, sort_by, order),
                )
                .label("reply_rank")
            )
            ranked = (
                self._view_query(viewer_id)
                .add_columns(rank)
                .where(comments_table.c.parent_id.in_(parent_ids))
                .subquery()
            )
            stmt = (
                select(ranked)
                .where(ranked.c.reply_rank <= per_parent)
                .order_by(ranked.c.parent_id, ranked.c.reply_rank)
            )

            result = await self.session.execute(stmt)
            children: Dict[CommentId, List[CommentView]] = defaultdict(list)
            for row in result.fetchall():
                child = row_to_comment_view(row._asdict())
                children[child.parent_id].append(child)
            return dict(children)

    async def add_points(self, comment_id: CommentId, delta: int) -> Optional[int]:
        """Atomically add ``delta`` to points."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(points=comments_table.c.points + delta)
            .returning(comments_table.c.points)
        )
        result = await self.session.execute(stmt)
        points = result.scalar_one_or_none()
        await self.session.flush()
        return points

    async def increment_comment_count(self, comment_id: CommentId) -> Optional[int]:
        """Atomically increment the reply count by 1."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(comment_count=comments_table.c.comment_count + 1)
            .returning(comments_table.c.comment_count)
        )
        result = await self.session.execute(stmt)
        count = result.scalar_one_or_none()
        await self.session.flush()
        return count
