"""CLI command for exporting the filtered view."""

from __future__ import annotations

from pathlib import Path

import click

from omsdash.application.export_csv import ExportCsvHandler
from omsdash.infrastructure.cli.options import build_criteria, filter_options, load_repository


@click.command("csv")
@filter_options
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Write to this file instead of stdout.")
@click.pass_obj
def export_csv(config, statuses, date_from, date_to, amount_min, amount_max, search,
               output: Path | None) -> None:
    """Export filtered orders as CSV."""
    criteria = build_criteria(statuses, date_from, date_to, amount_min, amount_max, search)
    content = ExportCsvHandler(order_repo=load_repository(config)).handle(criteria)

    if output is None:
        click.echo(content)
        return
    output.write_text(content, encoding="utf-8")
    click.echo(f"Exported to {output}")
