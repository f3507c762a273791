"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from pathlib import Path

from omsdash.application.load_orders import LoadOrdersHandler
from omsdash.domain.model.status import TransitionPolicy
from omsdash.domain.repository.order_repository import OrderRepository
from omsdash.infrastructure.persistence.in_memory_order_repository import (
    InMemoryOrderRepository,
)
from omsdash.infrastructure.persistence.json_seed_loader import JsonSeedLoader
from omsdash.infrastructure.simulation.event_source import (
    EventCallback,
    OrderView,
    SimulatedEventSource,
    SimulationConfig,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
DEFAULT_SEED_PATH = _DATA_DIR / "orders.json"


@dataclass(frozen=True)
class DashboardConfig:
    seed_path: Path = DEFAULT_SEED_PATH
    policy_name: str = "permissive"
    simulation: SimulationConfig = field(default_factory=SimulationConfig)

    def transition_policy(self) -> TransitionPolicy:
        return TransitionPolicy.named(self.policy_name)


def order_repository(config: DashboardConfig) -> InMemoryOrderRepository:
    """A repository pre-loaded from the configured seed file."""
    repo = InMemoryOrderRepository()
    LoadOrdersHandler(repo).handle(JsonSeedLoader(config.seed_path).load())
    return repo


def event_source(
    order_repo: OrderRepository,
    config: DashboardConfig,
    rng_seed: int | None = None,
    on_event: EventCallback | None = None,
    view: OrderView | None = None,
) -> SimulatedEventSource:
    return SimulatedEventSource(
        order_repo,
        config.simulation,
        rng=random.Random(rng_seed),
        on_event=on_event,
        view=view,
    )
