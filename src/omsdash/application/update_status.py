"""Application service: Update Order Status use case (single order)."""

from __future__ import annotations

from omsdash.domain.model.status import OrderStatus, TransitionPolicy
from omsdash.domain.repository.order_repository import OrderRepository


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        policy: TransitionPolicy | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._policy = policy or TransitionPolicy.permissive()

    def handle(self, order_id: str, status: OrderStatus) -> bool:
        """Set one order's status.

        Returns False when the order does not exist; that is not an
        error. Raises InvalidTransitionError if the policy forbids it.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            return False
        self._policy.check(order.status, status)
        return self._order_repo.set_status(order_id, status)
