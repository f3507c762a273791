"""Application service: Show Order use case (query)."""

from __future__ import annotations

from omsdash.application.dto import OrderDTO, OrderItemDTO
from omsdash.domain.exceptions import EntityNotFoundError
from omsdash.domain.model.order import Order
from omsdash.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order '{order_id}' not found")
        return self._to_dto(order)

    @staticmethod
    def _to_dto(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            customer_phone=order.customer_phone,
            status=order.status.value,
            total=str(order.total),
            order_date=order.order_date.strftime("%Y-%m-%d %H:%M UTC"),
            shipping_address=order.shipping_address.one_line(),
            items=[
                OrderItemDTO(
                    name=item.name,
                    sku=item.sku,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                )
                for item in order.items
            ],
        )
