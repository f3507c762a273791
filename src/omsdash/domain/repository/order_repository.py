"""Abstract repository for Order aggregate.

The repository is the single source of truth for orders. Views read
immutable snapshots from it and every write goes through one of the
command methods below.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from omsdash.domain.model.order import Order
from omsdash.domain.model.status import OrderStatus


class ChangeKind(Enum):
    LOADED = "loaded"
    INSERTED = "inserted"
    STATUS_CHANGED = "status_changed"


@dataclass(frozen=True)
class RepositoryChange:
    kind: ChangeKind
    order_ids: tuple[str, ...]


ChangeListener = Callable[[RepositoryChange], None]


class OrderRepository(ABC):

    @abstractmethod
    def load_all(self, orders: Sequence[Order]) -> None:
        """Replace the entire collection."""

    @abstractmethod
    def insert(self, order: Order) -> None:
        """Prepend a new order. Raises DuplicateIdError on id collision."""

    @abstractmethod
    def set_status(self, order_id: str, status: OrderStatus) -> bool:
        """Overwrite an order's status. Unknown ids are a silent no-op.

        Returns True if an order was found and updated.
        """

    @abstractmethod
    def bulk_set_status(self, order_ids: Iterable[str], status: OrderStatus) -> int:
        """Apply ``set_status`` to every id; return how many were updated."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def snapshot(self) -> tuple[Order, ...]:
        """Return every order, newest inserted first."""

    @abstractmethod
    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a change listener; the returned callable unregisters it."""

    def __len__(self) -> int:
        return len(self.snapshot())
