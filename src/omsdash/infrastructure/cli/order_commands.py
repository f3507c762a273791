"""CLI commands for orders: the table view, details and status edits."""

from __future__ import annotations

import click

from omsdash.application.bulk_update_status import BulkUpdateStatusHandler
from omsdash.application.dto import OrderSummaryDTO
from omsdash.application.list_orders import ListOrdersHandler
from omsdash.application.show_order import ShowOrderHandler
from omsdash.application.update_status import UpdateOrderStatusHandler
from omsdash.domain.exceptions import DomainException
from omsdash.domain.model.status import parse_status
from omsdash.infrastructure.cli.options import (
    STATUS_CHOICE,
    build_criteria,
    filter_options,
    load_repository,
)


def _parse_ids(raw: str) -> list[str]:
    """Parse 'ORD-1, ORD-2' into ['ORD-1', 'ORD-2']."""
    ids = [part.strip() for part in raw.split(",") if part.strip()]
    if not ids:
        raise click.BadParameter("Expected at least one order ID.")
    return ids


def display_rows(rows: list[OrderSummaryDTO]) -> None:
    """Shared formatting for the orders table."""
    if not rows:
        click.echo("No orders match the current filters.")
        return

    click.echo(f"{'ID':<16} {'Customer':<22} {'Status':<11} {'Amount':>10}  {'Order Date':<20}")
    click.echo("-" * 83)
    for row in rows:
        click.echo(
            f"{row.id:<16} {row.customer_name:<22} {row.status:<11} {row.total:>10}  {row.order_date:<20}"
        )
    click.echo("-" * 83)
    click.echo(f"{len(rows)} order(s)")


@click.command("list")
@filter_options
@click.option("--page", type=click.IntRange(min=1), default=None,
              help="Show only this page of the results (1-based).")
@click.option("--page-size", type=click.IntRange(min=1), default=10, show_default=True,
              help="Rows per page when --page is given.")
@click.pass_obj
def order_list(config, statuses, date_from, date_to, amount_min, amount_max, search,
               page: int | None, page_size: int) -> None:
    """List orders matching the filters."""
    criteria = build_criteria(statuses, date_from, date_to, amount_min, amount_max, search)
    handler = ListOrdersHandler(order_repo=load_repository(config))
    if page is None:
        display_rows(handler.handle(criteria))
        return

    result = handler.page(criteria, page, page_size)
    display_rows(result.rows)
    click.echo(f"Page {result.page} of {result.page_count} ({result.total} order(s) in total)")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_obj
def order_show(config, order_id: str) -> None:
    """Show details of an order, including items and shipping address."""
    handler = ShowOrderHandler(order_repo=load_repository(config))

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name} <{dto.customer_email}>  {dto.customer_phone}")
    click.echo(f"Placed:   {dto.order_date}")
    click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo()
    if dto.items:
        click.echo(f"  {'Item':<24} {'SKU':<12} {'Qty':>5} {'Price':>10} {'Total':>10}")
        click.echo(f"  {'-'*64}")
        for item in dto.items:
            click.echo(
                f"  {item.name:<24} {item.sku:<12} {item.quantity:>5} "
                f"{item.unit_price:>10} {item.line_total:>10}"
            )
        click.echo(f"  {'-'*64}")
    else:
        click.echo("  (no line items)")
    click.echo(f"  {'Order Total':<44} {dto.total:>20}")


@click.command("set-status")
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option("--status", required=True, type=STATUS_CHOICE, help="New status.")
@click.pass_obj
def order_set_status(config, order_id: str, status: str) -> None:
    """Change the status of one order."""
    repo = load_repository(config)
    handler = UpdateOrderStatusHandler(order_repo=repo, policy=config.transition_policy())

    try:
        updated = handler.handle(order_id, parse_status(status))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if updated:
        click.echo(f"Order {order_id} status updated to {status.lower()}")
    else:
        click.echo(f"Order {order_id} not found; nothing changed.")


@click.command("bulk-status")
@click.option("--ids", required=True, help="Order IDs as 'ID,ID,ID'.")
@click.option("--status", required=True, type=STATUS_CHOICE, help="New status.")
@click.pass_obj
def order_bulk_status(config, ids: str, status: str) -> None:
    """Change the status of several orders at once."""
    repo = load_repository(config)
    handler = BulkUpdateStatusHandler(order_repo=repo, policy=config.transition_policy())

    try:
        result = handler.handle(_parse_ids(ids), parse_status(status))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f'Updated {result.updated} orders to "{status.lower()}"')
    if result.skipped_missing:
        click.echo(f"Not found: {', '.join(result.skipped_missing)}")
    if result.rejected:
        click.echo(f"Not allowed by policy: {', '.join(result.rejected)}")
