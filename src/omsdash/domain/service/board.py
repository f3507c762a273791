"""Domain service: Board Reconciler.

Groups a filtered view into the fixed status columns and turns a
drag-and-drop gesture into at most one status change. The grouping is
always recomputed from a fresh snapshot and never patched in place, so
the board cannot drift away from the repository.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from omsdash.domain.model.order import Order
from omsdash.domain.model.status import BOARD_COLUMNS, OrderStatus
from omsdash.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DragEvent:
    """The outcome of a drag gesture.

    ``destination`` is None when the card was released outside any
    column.
    """

    order_id: str
    source: OrderStatus
    destination: OrderStatus | None

    @property
    def is_noop(self) -> bool:
        return self.destination is None or self.destination == self.source


class Board:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    @staticmethod
    def group(orders: Iterable[Order]) -> dict[OrderStatus, tuple[Order, ...]]:
        """Partition *orders* into one bucket per column.

        Buckets follow ``BOARD_COLUMNS`` and keep the relative order of
        the input. Empty columns are present with no cards.
        """
        buckets: dict[OrderStatus, list[Order]] = {status: [] for status in BOARD_COLUMNS}
        for order in orders:
            buckets[order.status].append(order)
        return {status: tuple(cards) for status, cards in buckets.items()}

    @staticmethod
    def column_counts(orders: Iterable[Order]) -> dict[OrderStatus, int]:
        counts = {status: 0 for status in BOARD_COLUMNS}
        for order in orders:
            counts[order.status] += 1
        return counts

    def handle_drop(self, event: DragEvent) -> bool:
        """Apply a drop. Returns True if an order's status was set."""
        if event.is_noop:
            logger.debug("Ignoring drop of %s (no column change)", event.order_id)
            return False
        # Visual position inside a column is not stored; only the column is.
        return self._order_repo.set_status(event.order_id, event.destination)
