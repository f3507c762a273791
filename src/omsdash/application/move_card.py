"""Application service: Move Card use case (kanban drag-and-drop)."""

from __future__ import annotations

from omsdash.domain.model.status import TransitionPolicy
from omsdash.domain.repository.order_repository import OrderRepository
from omsdash.domain.service.board import Board, DragEvent


class MoveCardHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        policy: TransitionPolicy | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._policy = policy or TransitionPolicy.permissive()
        self._board = Board(order_repo)

    def handle(self, event: DragEvent) -> bool:
        """Reconcile a drop into a status change.

        Returns True if the order's status was set. Drops outside any
        column and drops onto the source column change nothing.
        """
        if event.is_noop:
            return False
        order = self._order_repo.get_by_id(event.order_id)
        if order is not None:
            self._policy.check(order.status, event.destination)
        return self._board.handle_drop(event)
