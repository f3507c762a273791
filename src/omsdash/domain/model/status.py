"""Order status domain and the transition policy that guards it.

The five statuses form a fixed, closed set. Their declaration order is
also the column order of the kanban board; it is a presentation order,
not a workflow order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum

from omsdash.domain.exceptions import InvalidTransitionError, ValidationError


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    def __str__(self) -> str:
        return self.value


BOARD_COLUMNS: tuple[OrderStatus, ...] = tuple(OrderStatus)


def parse_status(raw: str | OrderStatus) -> OrderStatus:
    """Parse a status name case-insensitively."""
    if isinstance(raw, OrderStatus):
        return raw
    try:
        return OrderStatus(str(raw).strip().lower())
    except ValueError:
        valid = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(
            f"Unknown status '{raw}'. Expected one of: {valid}"
        ) from None


class TransitionPolicy:
    """Maps each status to the set of statuses it may move to.

    Staying on the same status is always allowed; it is an observable
    no-op rather than a transition.
    """

    def __init__(self, name: str, table: Mapping[OrderStatus, Iterable[OrderStatus]]) -> None:
        self.name = name
        self._table: dict[OrderStatus, frozenset[OrderStatus]] = {
            status: frozenset(table.get(status, ())) for status in OrderStatus
        }

    @classmethod
    def permissive(cls) -> TransitionPolicy:
        """Any status may move to any other status."""
        return cls("permissive", {status: OrderStatus for status in OrderStatus})

    @classmethod
    def guarded(cls) -> TransitionPolicy:
        """A conventional fulfilment workflow.

        ``delivered`` is terminal; a cancelled order can only be reopened
        as ``pending``.
        """
        return cls(
            "guarded",
            {
                OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
                OrderStatus.PROCESSING: {
                    OrderStatus.PENDING,
                    OrderStatus.SHIPPED,
                    OrderStatus.CANCELLED,
                },
                OrderStatus.SHIPPED: {OrderStatus.PROCESSING, OrderStatus.DELIVERED},
                OrderStatus.DELIVERED: set(),
                OrderStatus.CANCELLED: {OrderStatus.PENDING},
            },
        )

    @classmethod
    def named(cls, name: str) -> TransitionPolicy:
        factories = {"permissive": cls.permissive, "guarded": cls.guarded}
        try:
            return factories[name.strip().lower()]()
        except KeyError:
            raise ValidationError(
                f"Unknown transition policy '{name}'. "
                f"Expected one of: {', '.join(factories)}"
            ) from None

    def next_statuses(self, current: OrderStatus) -> frozenset[OrderStatus]:
        return self._table[current]

    def allows(self, current: OrderStatus, new: OrderStatus) -> bool:
        return current == new or new in self._table[current]

    def check(self, current: OrderStatus, new: OrderStatus) -> None:
        if not self.allows(current, new):
            raise InvalidTransitionError(
                f"Cannot move order from {current.value} to {new.value} "
                f"under the {self.name} policy"
            )

    def __repr__(self) -> str:
        return f"TransitionPolicy({self.name!r})"
