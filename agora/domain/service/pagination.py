"""Pagination and ordering shared by every listing.

Posts, top-level comments and replies all page through here so they agree
on offsets, page counts and tie-breaking.
"""

import math
from typing import Generic, Iterable, List, Protocol, TypeVar

from pydantic import BaseModel

from agora.domain.value import SortBy, SortOrder
from agora.domain.value.common import ValueObject


class PageWindow(ValueObject):
    """Rows to skip for a page, and how many pages exist."""

    offset: int
    total_pages: int


def paginate(total_matching: int, limit: int, page: int) -> PageWindow:
    """Compute the window of one page.

    Args:
        total_matching: Number of rows matching the listing filters
        limit: Page size (> 0)
        page: 1-based page number

    Returns:
        Offset of the page and ``ceil(total_matching / limit)`` pages

    Raises:
        ValueError: If limit or page is out of range
    """
    if limit <= 0:
        raise ValueError("limit must be positive")
    if page < 1:
        raise ValueError("page must be at least 1")
    return PageWindow(
        offset=(page - 1) * limit,
        total_pages=math.ceil(total_matching / limit),
    )


T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of a listing."""

    items: List[T]
    page: int
    total_pages: int


class Sortable(Protocol):
    """Anything with the columns a listing sorts on."""

    id: int
    points: int
    created_at: object


R = TypeVar("R", bound=Sortable)


def sort_records(records: Iterable[R], sort_by: SortBy, order: SortOrder) -> List[R]:
    """Order records the way the SQL listings do.

    Records are first put in insertion (id) order; the sort on the chosen
    column is stable, including when reversed, so ties keep insertion order.

    Args:
        records: Posts or comments
        sort_by: Sort column
        order: Sort direction

    Returns:
        New list in listing order
    """
    ordered = sorted(records, key=lambda r: r.id)
    if sort_by == SortBy.POINTS:
        ordered.sort(key=lambda r: r.points, reverse=order == SortOrder.DESC)
    else:
        ordered.sort(key=lambda r: r.created_at, reverse=order == SortOrder.DESC)
    return ordered
