"""Application service: List Orders use case (query).

Produces the dashboard's read model: the filtered view of the
repository, recomputed from a fresh snapshot on every call.
"""

from __future__ import annotations

from omsdash.application.dto import OrderPageDTO, OrderSummaryDTO
from omsdash.domain.exceptions import ValidationError
from omsdash.domain.model.filters import FilterCriteria
from omsdash.domain.model.order import Order
from omsdash.domain.repository.order_repository import OrderRepository
from omsdash.domain.service.filter_engine import apply_filters


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def filtered(self, criteria: FilterCriteria) -> tuple[Order, ...]:
        return apply_filters(self._order_repo.snapshot(), criteria)

    def handle(self, criteria: FilterCriteria) -> list[OrderSummaryDTO]:
        return [OrderSummaryDTO.from_order(o) for o in self.filtered(criteria)]

    def page(self, criteria: FilterCriteria, page: int, page_size: int) -> OrderPageDTO:
        """Slice the filtered view. A page past the end is empty."""
        if page < 1:
            raise ValidationError("Page must be at least 1")
        if page_size < 1:
            raise ValidationError("Page size must be at least 1")
        orders = self.filtered(criteria)
        start = (page - 1) * page_size
        rows = [OrderSummaryDTO.from_order(o) for o in orders[start:start + page_size]]
        return OrderPageDTO(rows=rows, page=page, page_size=page_size, total=len(orders))
