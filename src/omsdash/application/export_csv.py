"""Application service: Export CSV use case.

A stateless transform of the filtered view. Every field is wrapped in
double quotes (embedded quotes doubled), rows are joined with ``\\n`` and
there is no trailing newline.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable

from omsdash.domain.model.filters import FilterCriteria
from omsdash.domain.model.order import Order
from omsdash.domain.repository.order_repository import OrderRepository
from omsdash.domain.service.filter_engine import apply_filters

CSV_HEADER = ("ID", "Customer Name", "Email", "Phone", "Status", "Total", "Order Date")


def orders_to_csv(orders: Iterable[Order]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for order in orders:
        writer.writerow(
            (
                order.id,
                order.customer_name,
                order.customer_email,
                order.customer_phone,
                order.status.value,
                order.total.plain(),
                order.order_date.isoformat(),
            )
        )
    return buffer.getvalue().rstrip("\n")


class ExportCsvHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, criteria: FilterCriteria) -> str:
        return orders_to_csv(apply_filters(self._order_repo.snapshot(), criteria))
