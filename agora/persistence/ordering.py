"""ORDER BY helpers shared by the listing queries."""

from typing import List

from sqlalchemy import ColumnElement, Table

from agora.domain.value import SortBy, SortOrder


def sort_column(table: Table, sort_by: SortBy) -> ColumnElement:
    """Column a listing sorts on."""
    if sort_by == SortBy.POINTS:
        return table.c.points
    return table.c.created_at


def order_by_clauses(
    table: Table, sort_by: SortBy, order: SortOrder
) -> List[ColumnElement]:
    """Build ``<column> <dir>, id ASC``.

    The trailing id keeps rows with equal sort values in insertion order.

    Args:
        table: Posts or comments table
        sort_by: Sort column
        order: Sort direction

    Returns:
        Clauses for ``order_by`` or a window's ``order_by``
    """
    column = sort_column(table, sort_by)
    primary = column.desc() if order == SortOrder.DESC else column.asc()
    return [primary, table.c.id.asc()]
