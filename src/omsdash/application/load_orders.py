"""Application service: Load Orders use case (startup seed)."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from omsdash.domain.model.order import Order
from omsdash.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class LoadOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, orders: Sequence[Order]) -> int:
        """Replace the repository contents with already parsed seed orders.

        Raises MalformedSeedError if *orders* holds duplicate ids or
        anything that is not an order; the repository is left untouched
        in that case.
        """
        self._order_repo.load_all(orders)
        logger.info("Loaded %d orders from seed", len(orders))
        return len(orders)
