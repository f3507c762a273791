"""Process-wide filter settings for the dashboard views.

Each setter replaces one dimension and leaves the others alone; the
criteria object itself is immutable, so a view that captured
``criteria`` keeps a consistent copy.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from omsdash.domain.model.filters import FilterCriteria
from omsdash.domain.model.status import OrderStatus


class FilterState:

    def __init__(self, criteria: FilterCriteria | None = None) -> None:
        self._criteria = criteria or FilterCriteria()

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    def set_status_filter(self, statuses: Iterable[OrderStatus]) -> None:
        self._criteria = self._criteria.with_statuses(statuses)

    def set_date_range(self, start: datetime | None, end: datetime | None) -> None:
        self._criteria = self._criteria.with_date_range(start, end)

    def set_amount_range(self, minimum: Decimal | None, maximum: Decimal | None) -> None:
        self._criteria = self._criteria.with_amount_range(minimum, maximum)

    def set_search(self, term: str) -> None:
        self._criteria = self._criteria.with_search(term)

    def clear(self) -> None:
        self._criteria = FilterCriteria()
