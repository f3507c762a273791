"""CLI command that runs the simulated live feed for a while."""

from __future__ import annotations

import asyncio
import dataclasses

import click

from omsdash.application.list_orders import ListOrdersHandler
from omsdash.domain.exceptions import DomainException
from omsdash.domain.model.filters import FilterCriteria
from omsdash.domain.repository.order_repository import RepositoryChange
from omsdash.infrastructure.bootstrap import DashboardConfig, event_source
from omsdash.infrastructure.cli.options import build_criteria, filter_options, load_repository
from omsdash.infrastructure.simulation.event_source import SimulatedEvent


async def _run_feed(
    config: DashboardConfig,
    criteria: FilterCriteria,
    duration: float,
    rng_seed: int | None,
) -> int:
    repo = load_repository(config)
    view = ListOrdersHandler(repo)
    in_view = len(view.filtered(criteria))

    def echo_event(event: SimulatedEvent) -> None:
        click.echo(event.message)

    def echo_view_size(change: RepositoryChange) -> None:
        nonlocal in_view
        count = len(view.filtered(criteria))
        if count != in_view:
            in_view = count
            click.echo(f"  {count} orders in view")

    unsubscribe = repo.subscribe(echo_view_size)
    source = event_source(
        repo,
        config,
        rng_seed=rng_seed,
        on_event=echo_event,
        view=lambda: view.filtered(criteria),
    )
    try:
        async with source:
            await asyncio.sleep(duration)
    finally:
        unsubscribe()
    return len(view.filtered(criteria))


@click.command("watch")
@filter_options
@click.option("--duration", type=click.FloatRange(min=0), default=60.0, show_default=True,
              help="Seconds to run the feed.")
@click.option("--drift-interval", type=float, default=None, help="Seconds between status changes.")
@click.option("--arrival-min", type=float, default=None, help="Shortest delay between new orders.")
@click.option("--arrival-max", type=float, default=None, help="Longest delay between new orders.")
@click.option("--rng-seed", type=int, default=None, help="Seed for a reproducible feed.")
@click.pass_obj
def watch(config: DashboardConfig, statuses, date_from, date_to, amount_min, amount_max,
          search, duration: float, drift_interval: float | None, arrival_min: float | None,
          arrival_max: float | None, rng_seed: int | None) -> None:
    """Run the simulated feed of status changes and new orders.

    Status drift only picks orders that pass the filters, like the
    dashboard it simulates.
    """
    criteria = build_criteria(statuses, date_from, date_to, amount_min, amount_max, search)
    overrides = {
        name: value
        for name, value in (
            ("drift_interval", drift_interval),
            ("arrival_min", arrival_min),
            ("arrival_max", arrival_max),
        )
        if value is not None
    }
    try:
        simulation = dataclasses.replace(config.simulation, **overrides)
    except DomainException as exc:
        raise click.BadParameter(str(exc))
    config = dataclasses.replace(config, simulation=simulation)

    count = asyncio.run(_run_feed(config, criteria, duration, rng_seed))
    click.echo(f"Feed stopped; {count} orders in view.")
