"""Domain service: Filter Engine.

A pure function of (orders, criteria). Criteria are applied in a fixed
order (status, date range, amount range, text search) and evaluation
stops at the first one an order fails. Nothing here mutates its input,
so repeated calls against the same inputs yield equal results.
"""

from __future__ import annotations

from collections.abc import Iterable

from omsdash.domain.model.filters import AmountRange, DateRange, FilterCriteria
from omsdash.domain.model.order import Order
from omsdash.domain.model.status import OrderStatus


def matches_status(order: Order, statuses: frozenset[OrderStatus]) -> bool:
    return not statuses or order.status in statuses


def matches_date_range(order: Order, date_range: DateRange) -> bool:
    if date_range.start is not None and order.order_date < date_range.start:
        return False
    if date_range.end is not None and order.order_date > date_range.end:
        return False
    return True


def matches_amount_range(order: Order, amount_range: AmountRange) -> bool:
    if amount_range.min is not None and order.total < amount_range.min:
        return False
    if amount_range.max is not None and order.total > amount_range.max:
        return False
    return True


def matches_search(order: Order, term: str) -> bool:
    if not term:
        return True
    return term.lower() in order.search_text.lower()


def matches(order: Order, criteria: FilterCriteria) -> bool:
    return (
        matches_status(order, criteria.statuses)
        and matches_date_range(order, criteria.date_range)
        and matches_amount_range(order, criteria.amount_range)
        and matches_search(order, criteria.search)
    )


def apply_filters(orders: Iterable[Order], criteria: FilterCriteria) -> tuple[Order, ...]:
    """Return the orders satisfying every criterion, in their original order."""
    if criteria.is_empty:
        return tuple(orders)
    return tuple(order for order in orders if matches(order, criteria))
