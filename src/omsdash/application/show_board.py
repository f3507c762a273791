"""Application service: Show Board use case (query)."""

from __future__ import annotations

from omsdash.application.dto import BoardColumnDTO, BoardDTO, OrderSummaryDTO
from omsdash.application.list_orders import ListOrdersHandler
from omsdash.domain.model.filters import FilterCriteria
from omsdash.domain.repository.order_repository import OrderRepository
from omsdash.domain.service.board import Board


class ShowBoardHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._orders = ListOrdersHandler(order_repo)

    def handle(self, criteria: FilterCriteria) -> BoardDTO:
        grouped = Board.group(self._orders.filtered(criteria))
        return BoardDTO(
            columns=[
                BoardColumnDTO(
                    status=status.value,
                    cards=[OrderSummaryDTO.from_order(o) for o in cards],
                )
                for status, cards in grouped.items()
            ]
        )
