"""Synthesizes plausible new orders for the simulated live feed."""

from __future__ import annotations

import random
from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal

from omsdash.domain.model.order import Order, ShippingAddress
from omsdash.domain.model.status import BOARD_COLUMNS
from omsdash.domain.model.value_objects import Money

# Totals are drawn uniformly from [MIN_TOTAL, MIN_TOTAL + TOTAL_SPAN).
MIN_TOTAL = 20.0
TOTAL_SPAN = 500.0

PLACEHOLDER_ADDRESS = ShippingAddress(
    street="123 Random St",
    city="Random City",
    state="RC",
    zip_code="12345",
    country="USA",
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OrderFactory:

    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._rng = rng or random.Random()
        self._clock = clock
        self._last_millis = 0

    def next_id(self, now: datetime) -> str:
        """``ORD-<epoch millis>``, strictly increasing across calls."""
        millis = int(now.timestamp() * 1000)
        if millis <= self._last_millis:
            millis = self._last_millis + 1
        self._last_millis = millis
        return f"ORD-{millis}"

    def random_order(self) -> Order:
        now = self._clock()
        customer_no = self._rng.randrange(1000)
        email_no = self._rng.randrange(1000)
        # Truncate to cents so the upper bound stays exclusive.
        cents = int((self._rng.random() * TOTAL_SPAN + MIN_TOTAL) * 100)
        return Order(
            id=self.next_id(now),
            customer_name=f"Customer {customer_no}",
            customer_email=f"customer{email_no}@email.com",
            customer_phone="+1-555-0000",
            order_date=now,
            status=self._rng.choice(BOARD_COLUMNS),
            total=Money(Decimal(cents).scaleb(-2)),
            shipping_address=PLACEHOLDER_ADDRESS,
        )
