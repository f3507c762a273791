import logging
from pathlib import Path

import click

from omsdash.infrastructure.bootstrap import DEFAULT_SEED_PATH, DashboardConfig
from omsdash.infrastructure.cli.board_commands import board_move, board_show
from omsdash.infrastructure.cli.export_commands import export_csv
from omsdash.infrastructure.cli.order_commands import (
    order_bulk_status,
    order_list,
    order_set_status,
    order_show,
)
from omsdash.infrastructure.cli.watch_command import watch

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option("--seed", "seed_path", type=click.Path(dir_okay=False, path_type=Path),
              default=DEFAULT_SEED_PATH, envvar="OMSDASH_SEED", show_default=True,
              help="Seed document with the initial orders.")
@click.option("--policy", type=click.Choice(["permissive", "guarded"], case_sensitive=False),
              default="permissive", envvar="OMSDASH_POLICY", show_default=True,
              help="Status transition policy for user edits.")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False),
              default="WARNING", envvar="OMSDASH_LOG_LEVEL", show_default=True)
@click.pass_context
def cli(ctx: click.Context, seed_path: Path, policy: str, log_level: str) -> None:
    """OMS Dashboard — order filtering, status board and live feed"""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = DashboardConfig(seed_path=seed_path, policy_name=policy)


@cli.group()
def orders() -> None:
    """Browse and update orders."""


@cli.group()
def board() -> None:
    """Kanban board by status."""


@cli.group()
def export() -> None:
    """Export the filtered view."""


# Register subcommands
orders.add_command(order_list)
orders.add_command(order_show)
orders.add_command(order_set_status)
orders.add_command(order_bulk_status)
board.add_command(board_show)
board.add_command(board_move)
export.add_command(export_csv)
cli.add_command(watch)
