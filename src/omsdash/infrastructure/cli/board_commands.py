"""CLI commands for the kanban board."""

from __future__ import annotations

import click

from omsdash.application.move_card import MoveCardHandler
from omsdash.application.show_board import ShowBoardHandler
from omsdash.domain.exceptions import DomainException
from omsdash.domain.model.filters import FilterCriteria
from omsdash.domain.model.status import parse_status
from omsdash.domain.service.board import DragEvent
from omsdash.infrastructure.cli.options import (
    STATUS_CHOICE,
    build_criteria,
    filter_options,
    load_repository,
)


def _display_board(handler: ShowBoardHandler, criteria: FilterCriteria) -> None:
    board = handler.handle(criteria)
    for column in board.columns:
        click.echo(f"== {column.status.capitalize()} ({column.count}) ==")
        if not column.cards:
            click.echo("  <empty>")
        for card in column.cards:
            click.echo(f"  {card.id:<16} {card.customer_name:<22} {card.total:>10}")
        click.echo()


@click.command("show")
@filter_options
@click.pass_obj
def board_show(config, statuses, date_from, date_to, amount_min, amount_max, search) -> None:
    """Show filtered orders grouped by status column."""
    criteria = build_criteria(statuses, date_from, date_to, amount_min, amount_max, search)
    _display_board(ShowBoardHandler(order_repo=load_repository(config)), criteria)


@click.command("move")
@click.option("--id", "order_id", required=True, help="Order ID of the dragged card.")
@click.option("--from", "source", required=True, type=STATUS_CHOICE, help="Source column.")
@click.option("--to", "destination", default=None, type=STATUS_CHOICE,
              help="Destination column (omit for a drop outside the board).")
@click.pass_obj
def board_move(config, order_id: str, source: str, destination: str | None) -> None:
    """Drop a card onto another column, then show the board."""
    repo = load_repository(config)
    handler = MoveCardHandler(order_repo=repo, policy=config.transition_policy())
    event = DragEvent(
        order_id=order_id,
        source=parse_status(source),
        destination=parse_status(destination) if destination else None,
    )

    try:
        moved = handler.handle(event)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if moved:
        click.echo(f"Moved {order_id} to {event.destination.value}.")
    else:
        click.echo(f"No change for {order_id}.")
    click.echo()
    _display_board(ShowBoardHandler(order_repo=repo), FilterCriteria())
