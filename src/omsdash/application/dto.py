"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from omsdash.domain.model.order import Order


@dataclass(frozen=True)
class OrderSummaryDTO:
    """Output: one row of the orders table / one card on the board."""

    id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    status: str
    total: str  # formatted, e.g. "$15.00"
    order_date: str

    @staticmethod
    def from_order(order: Order) -> OrderSummaryDTO:
        return OrderSummaryDTO(
            id=order.id,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            customer_phone=order.customer_phone,
            status=order.status.value,
            total=str(order.total),
            order_date=order.order_date.strftime("%Y-%m-%d %H:%M UTC"),
        )


@dataclass(frozen=True)
class OrderItemDTO:
    name: str
    sku: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as shown in the details view."""

    id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    status: str
    total: str
    order_date: str
    shipping_address: str
    items: list[OrderItemDTO] = field(default_factory=list)


@dataclass(frozen=True)
class BoardColumnDTO:
    status: str
    cards: list[OrderSummaryDTO]

    @property
    def count(self) -> int:
        return len(self.cards)


@dataclass(frozen=True)
class BoardDTO:
    columns: list[BoardColumnDTO]


@dataclass(frozen=True)
class BulkUpdateResult:
    """Output: what a bulk status change actually did."""

    requested: int
    updated: int
    skipped_missing: list[str] = field(default_factory=list)
    rejected: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class OrderPageDTO:
    """One page of the filtered view. ``page`` is 1-based."""

    rows: list[OrderSummaryDTO]
    page: int
    page_size: int
    total: int

    @property
    def page_count(self) -> int:
        return max(1, -(-self.total // self.page_size))
