"""In-memory implementation of OrderRepository.

Orders are kept in a list (newest first) plus an id index. Each command
runs under a re-entrant lock so a mutation is one indivisible step,
whether callers are asyncio tasks or real threads.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Sequence

from omsdash.domain.exceptions import DuplicateIdError, MalformedSeedError
from omsdash.domain.model.order import Order
from omsdash.domain.model.status import OrderStatus
from omsdash.domain.repository.order_repository import (
    ChangeKind,
    ChangeListener,
    OrderRepository,
    RepositoryChange,
)

logger = logging.getLogger(__name__)


class InMemoryOrderRepository(OrderRepository):

    def __init__(self, orders: Sequence[Order] | None = None) -> None:
        self._lock = threading.RLock()
        self._orders: list[Order] = []
        self._index: dict[str, int] = {}
        self._listeners: list[ChangeListener] = []
        if orders is not None:
            self.load_all(orders)

    # --- OrderRepository interface --------------------------------------------

    def load_all(self, orders: Sequence[Order]) -> None:
        if isinstance(orders, (str, bytes)) or not isinstance(orders, Sequence):
            raise MalformedSeedError(
                f"Expected a sequence of orders, got {type(orders).__name__}"
            )
        seen: set[str] = set()
        for position, order in enumerate(orders):
            if not isinstance(order, Order):
                raise MalformedSeedError(
                    f"Entry {position} is not an order ({type(order).__name__})"
                )
            if order.id in seen:
                raise MalformedSeedError(f"Duplicate order id '{order.id}' in seed")
            seen.add(order.id)

        with self._lock:
            self._orders = list(orders)
            self._reindex()
        logger.debug("Loaded %d orders", len(orders))
        self._notify(ChangeKind.LOADED, tuple(o.id for o in orders))

    def insert(self, order: Order) -> None:
        with self._lock:
            if order.id in self._index:
                raise DuplicateIdError(f"Order '{order.id}' already exists")
            self._orders.insert(0, order)
            self._reindex()
        logger.debug("Inserted order %s", order.id)
        self._notify(ChangeKind.INSERTED, (order.id,))

    def set_status(self, order_id: str, status: OrderStatus) -> bool:
        with self._lock:
            updated = self._set_status_locked(order_id, status)
        if updated:
            self._notify(ChangeKind.STATUS_CHANGED, (order_id,))
        return updated

    def bulk_set_status(self, order_ids: Iterable[str], status: OrderStatus) -> int:
        updated_ids: list[str] = []
        with self._lock:
            for order_id in dict.fromkeys(order_ids):
                if self._set_status_locked(order_id, status):
                    updated_ids.append(order_id)
        if updated_ids:
            self._notify(ChangeKind.STATUS_CHANGED, tuple(updated_ids))
        return len(updated_ids)

    def get_by_id(self, order_id: str) -> Order | None:
        with self._lock:
            position = self._index.get(order_id)
            return None if position is None else self._orders[position]

    def snapshot(self) -> tuple[Order, ...]:
        with self._lock:
            return tuple(self._orders)

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)

    # --- Internal helpers -----------------------------------------------------

    def _set_status_locked(self, order_id: str, status: OrderStatus) -> bool:
        position = self._index.get(order_id)
        if position is None:
            logger.debug("Status change for unknown order %s ignored", order_id)
            return False
        current = self._orders[position]
        self._orders[position] = current.with_status(status)
        logger.debug("Order %s: %s -> %s", order_id, current.status.value, status.value)
        return True

    def _reindex(self) -> None:
        self._index = {order.id: i for i, order in enumerate(self._orders)}

    def _notify(self, kind: ChangeKind, order_ids: tuple[str, ...]) -> None:
        change = RepositoryChange(kind, order_ids)
        for listener in list(self._listeners):
            listener(change)
