"""Order aggregate — the canonical purchase record.

Orders are immutable values. A status change produces a new Order that
replaces the old one inside the repository, so whatever a view holds is
a snapshot and never a live alias into the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal

from omsdash.domain.exceptions import ValidationError
from omsdash.domain.model.status import OrderStatus
from omsdash.domain.model.value_objects import Money, Quantity


def parse_timestamp(raw: str) -> datetime:
    """Parse an ISO-8601 timestamp; ``Z`` and naive values mean UTC."""
    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(f"Invalid ISO-8601 timestamp: {raw!r}") from exc
    return as_utc(parsed)


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class OrderItem:
    """A line on the order. Owned by its parent Order."""

    id: str
    name: str
    quantity: Quantity
    unit_price: Money
    sku: str

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class ShippingAddress:
    street: str
    city: str
    state: str
    zip_code: str
    country: str

    def one_line(self) -> str:
        return f"{self.street}, {self.city}, {self.state} {self.zip_code}, {self.country}"


@dataclass(frozen=True)
class Order:
    """Aggregate root for purchase orders.

    ``total`` is authoritative and is never reconciled against the line
    items: an order may carry a positive total with no items at all.
    """

    id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    order_date: datetime
    status: OrderStatus
    total: Money
    shipping_address: ShippingAddress
    items: tuple[OrderItem, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValidationError("Order id is required")
        if not isinstance(self.status, OrderStatus):
            raise ValidationError(f"Invalid order status: {self.status!r}")
        if self.order_date.tzinfo is None:
            # Frozen dataclass: normalise through object.__setattr__.
            object.__setattr__(self, "order_date", as_utc(self.order_date))
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    # --- State transitions ----------------------------------------------------

    def with_status(self, status: OrderStatus) -> Order:
        """Return a copy of this order carrying *status*."""
        return replace(self, status=status)

    # --- Computed properties --------------------------------------------------

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)

    @property
    def items_subtotal(self) -> Money:
        """Sum of line totals. Informational only, see ``total``."""
        result = Money(Decimal("0.00"), self.total.currency)
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def search_text(self) -> str:
        """The text the free-text filter matches against."""
        return f"{self.customer_name} {self.id}"
