"""Shared CLI options and helpers for building filter criteria."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal, InvalidOperation

import click

from omsdash.application.filter_state import FilterState
from omsdash.domain.exceptions import DomainException
from omsdash.domain.model.filters import FilterCriteria
from omsdash.domain.model.status import OrderStatus, parse_status
from omsdash.infrastructure.bootstrap import DashboardConfig, order_repository
from omsdash.infrastructure.persistence.in_memory_order_repository import (
    InMemoryOrderRepository,
)

STATUS_CHOICE = click.Choice([s.value for s in OrderStatus], case_sensitive=False)
DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S"]


def _parse_amount(ctx: click.Context, param: click.Parameter, value: str | None) -> Decimal | None:
    if value is None:
        return None
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise click.BadParameter(f"Invalid amount '{value}'.")
    if not amount.is_finite():
        raise click.BadParameter(f"Invalid amount '{value}'.")
    return amount


def filter_options(func: Callable) -> Callable:
    """Attach the four filter dimensions to a command."""
    decorators = [
        click.option("--status", "statuses", multiple=True, type=STATUS_CHOICE,
                     help="Only orders in this status (repeatable)."),
        click.option("--from", "date_from", type=click.DateTime(DATE_FORMATS), default=None,
                     help="Earliest order date (inclusive, UTC)."),
        click.option("--to", "date_to", type=click.DateTime(DATE_FORMATS), default=None,
                     help="Latest order date (inclusive, UTC)."),
        click.option("--min", "amount_min", callback=_parse_amount, default=None,
                     help="Minimum total (inclusive)."),
        click.option("--max", "amount_max", callback=_parse_amount, default=None,
                     help="Maximum total (inclusive)."),
        click.option("--search", default="", help="Case-insensitive match on customer name or ID."),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def build_criteria(
    statuses: tuple[str, ...],
    date_from,
    date_to,
    amount_min: Decimal | None,
    amount_max: Decimal | None,
    search: str,
) -> FilterCriteria:
    state = FilterState()
    try:
        state.set_status_filter(parse_status(s) for s in statuses)
        state.set_date_range(date_from, date_to)
        state.set_amount_range(amount_min, amount_max)
        state.set_search(search)
    except DomainException as exc:
        raise click.BadParameter(str(exc))
    return state.criteria


def load_repository(config: DashboardConfig) -> InMemoryOrderRepository:
    try:
        return order_repository(config)
    except DomainException as exc:
        raise click.ClickException(f"Failed to load orders: {exc}")
