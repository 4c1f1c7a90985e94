"""Unit tests for pagination and ordering."""

from datetime import datetime, timedelta, timezone

import pytest

from agora.domain.model.post import Post
from agora.domain.service.pagination import paginate, sort_records
from agora.domain.value import PostId, SortBy, SortOrder, UserId

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_post(post_id: int, points: int = 0, minutes: int = 0) -> Post:
    return Post(
        id=PostId(post_id),
        title=f"Post {post_id}",
        author_id=UserId("author"),
        content="Body",
        points=points,
        created_at=NOW + timedelta(minutes=minutes),
    )


class TestPaginate:
    """Tests for paginate."""

    def test_last_partial_page(self):
        """23 rows at 10 per page make 3 pages; page 3 starts at row 20."""
        window = paginate(total_matching=23, limit=10, page=3)

        assert window.offset == 20
        assert window.total_pages == 3

    def test_exact_multiple(self):
        window = paginate(total_matching=20, limit=10, page=1)

        assert window.offset == 0
        assert window.total_pages == 2

    def test_empty_listing_has_zero_pages(self):
        window = paginate(total_matching=0, limit=10, page=1)

        assert window.offset == 0
        assert window.total_pages == 0

    def test_page_past_the_end_still_computes_offset(self):
        window = paginate(total_matching=5, limit=10, page=4)

        assert window.offset == 30
        assert window.total_pages == 1

    @pytest.mark.parametrize("limit,page", [(0, 1), (-1, 1), (10, 0)])
    def test_invalid_window_raises(self, limit, page):
        with pytest.raises(ValueError):
            paginate(total_matching=10, limit=limit, page=page)


class TestSortRecords:
    """Tests for sort_records."""

    def test_points_desc_keeps_insertion_order_on_ties(self):
        """Equal points stay in id order; higher points come first."""
        posts = [make_post(3, points=5), make_post(1, points=5), make_post(2, points=7)]

        ordered = sort_records(posts, SortBy.POINTS, SortOrder.DESC)

        assert [p.id for p in ordered] == [2, 1, 3]

    def test_points_asc_keeps_insertion_order_on_ties(self):
        posts = [make_post(2, points=1), make_post(1, points=1), make_post(3, points=0)]

        ordered = sort_records(posts, SortBy.POINTS, SortOrder.ASC)

        assert [p.id for p in ordered] == [3, 1, 2]

    def test_recent_desc_newest_first(self):
        posts = [
            make_post(1, minutes=0),
            make_post(2, minutes=10),
            make_post(3, minutes=5),
        ]

        ordered = sort_records(posts, SortBy.RECENT, SortOrder.DESC)

        assert [p.id for p in ordered] == [2, 3, 1]

    def test_recent_asc_oldest_first(self):
        posts = [make_post(1, minutes=10), make_post(2, minutes=0)]

        ordered = sort_records(posts, SortBy.RECENT, SortOrder.ASC)

        assert [p.id for p in ordered] == [2, 1]

    def test_does_not_modify_input(self):
        posts = [make_post(2, points=1), make_post(1, points=3)]

        sort_records(posts, SortBy.POINTS, SortOrder.DESC)

        assert [p.id for p in posts] == [2, 1]
