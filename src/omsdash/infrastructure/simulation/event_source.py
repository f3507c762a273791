"""Simulated live feed: random status drift and new-order arrivals.

Two independent asyncio tasks share the event loop with whatever else
drives the repository. Each tick is a single synchronous repository
command, so ticks and user actions interleave as whole steps and never
mid-mutation. ``stop()`` cancels both tasks together.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from omsdash.domain.exceptions import DomainException, ValidationError
from omsdash.domain.model.order import Order
from omsdash.domain.model.status import BOARD_COLUMNS, OrderStatus
from omsdash.domain.repository.order_repository import OrderRepository
from omsdash.infrastructure.simulation.order_factory import OrderFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationConfig:
    """Timer settings, in seconds."""

    drift_interval: float = 15.0
    arrival_min: float = 10.0
    arrival_max: float = 15.0

    def __post_init__(self) -> None:
        if self.drift_interval <= 0:
            raise ValidationError("Drift interval must be positive")
        if self.arrival_min <= 0 or self.arrival_max <= 0:
            raise ValidationError("Arrival delays must be positive")
        if self.arrival_min > self.arrival_max:
            raise ValidationError("Arrival minimum must not exceed arrival maximum")


class EventKind(Enum):
    STATUS_DRIFT = "status_drift"
    NEW_ORDER = "new_order"


@dataclass(frozen=True)
class SimulatedEvent:
    kind: EventKind
    order_id: str
    status: OrderStatus

    @property
    def message(self) -> str:
        if self.kind is EventKind.NEW_ORDER:
            return f"New order {self.order_id} added"
        return f"Order {self.order_id} status updated to {self.status.value}"


EventCallback = Callable[[SimulatedEvent], None]
OrderView = Callable[[], Sequence[Order]]


class SimulatedEventSource:
    """Drives the repository with random drift and new arrivals.

    *view* supplies the orders drift may pick from, by default the whole
    repository. The CLI passes the filtered view so that only orders on
    screen drift.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        config: SimulationConfig | None = None,
        rng: random.Random | None = None,
        factory: OrderFactory | None = None,
        on_event: EventCallback | None = None,
        view: OrderView | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._config = config or SimulationConfig()
        self._rng = rng or random.Random()
        self._factory = factory or OrderFactory(self._rng)
        self._on_event = on_event
        self._view = view or order_repo.snapshot
        self._tasks: list[asyncio.Task] = []

    # --- Single ticks ---------------------------------------------------------

    def drift_once(self) -> SimulatedEvent | None:
        """Move one random order in view to a random status.

        Returns None if the view is empty.
        """
        orders = self._view()
        if not orders:
            return None
        target = self._rng.choice(orders)
        status = self._rng.choice(BOARD_COLUMNS)
        # The order may have vanished from our view; set_status tolerates that.
        self._order_repo.set_status(target.id, status)
        return self._emit(SimulatedEvent(EventKind.STATUS_DRIFT, target.id, status))

    def arrive_once(self) -> SimulatedEvent:
        """Synthesize one new order and prepend it."""
        order = self._factory.random_order()
        self._order_repo.insert(order)
        return self._emit(SimulatedEvent(EventKind.NEW_ORDER, order.id, order.status))

    def next_arrival_delay(self) -> float:
        cfg = self._config
        return self._rng.uniform(cfg.arrival_min, cfg.arrival_max)

    # --- Lifecycle ------------------------------------------------------------

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    def start(self) -> None:
        """Spawn both timers on the running event loop."""
        if self.running:
            raise RuntimeError("Simulated event source is already running")
        loop = asyncio.get_running_loop()
        self._tasks = [
            loop.create_task(self._drift_loop(), name="omsdash-status-drift"),
            loop.create_task(self._arrival_loop(), name="omsdash-arrivals"),
        ]
        logger.info(
            "Simulated feed started (drift every %.1fs, arrivals every %.1f-%.1fs)",
            self._config.drift_interval,
            self._config.arrival_min,
            self._config.arrival_max,
        )

    async def stop(self) -> None:
        """Cancel both timers and wait for them to finish."""
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for result in results:
            if isinstance(result, Exception):
                raise result
        if tasks:
            logger.info("Simulated feed stopped")

    async def __aenter__(self) -> SimulatedEventSource:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    # --- Timer loops ----------------------------------------------------------

    async def _drift_loop(self) -> None:
        while True:
            await asyncio.sleep(self._config.drift_interval)
            self._guarded(self.drift_once)

    async def _arrival_loop(self) -> None:
        while True:
            await asyncio.sleep(self.next_arrival_delay())
            self._guarded(self.arrive_once)

    def _guarded(self, tick: Callable[[], object]) -> None:
        try:
            tick()
        except DomainException as exc:
            logger.warning("Simulated tick failed: %s", exc)

    def _emit(self, event: SimulatedEvent) -> SimulatedEvent:
        logger.info(event.message)
        if self._on_event is not None:
            self._on_event(event)
        return event
