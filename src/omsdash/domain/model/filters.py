"""Filter criteria for the dashboard's derived view.

Every dimension is optional. An empty status set, open bounds and a
blank search term all mean "do not constrain". Inverted bounds are
accepted and simply match nothing.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal

from omsdash.domain.model.order import as_utc
from omsdash.domain.model.status import OrderStatus, parse_status
from omsdash.domain.model.value_objects import Money


@dataclass(frozen=True)
class DateRange:
    """Inclusive on both ends; either bound may be None."""

    start: datetime | None = None
    end: datetime | None = None

    def __post_init__(self) -> None:
        if self.start is not None:
            object.__setattr__(self, "start", as_utc(self.start))
        if self.end is not None:
            object.__setattr__(self, "end", as_utc(self.end))

    @property
    def is_open(self) -> bool:
        return self.start is None and self.end is None


@dataclass(frozen=True)
class AmountRange:
    """Inclusive on both ends; either bound may be None.

    Bounds are coerced to Money, so anything that is not a finite,
    non-negative amount raises ValidationError.
    """

    min: Money | None = None
    max: Money | None = None

    def __post_init__(self) -> None:
        for name in ("min", "max"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, Money):
                object.__setattr__(self, name, Money.of(value))

    @property
    def is_open(self) -> bool:
        return self.min is None and self.max is None


@dataclass(frozen=True)
class FilterCriteria:
    statuses: frozenset[OrderStatus] = field(default_factory=frozenset)
    date_range: DateRange = field(default_factory=DateRange)
    amount_range: AmountRange = field(default_factory=AmountRange)
    search: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "statuses", frozenset(parse_status(s) for s in self.statuses)
        )

    @property
    def is_empty(self) -> bool:
        return (
            not self.statuses
            and self.date_range.is_open
            and self.amount_range.is_open
            and not self.search
        )

    # --- Builders used by FilterState -----------------------------------------

    def with_statuses(self, statuses: Iterable[OrderStatus]) -> FilterCriteria:
        return replace(self, statuses=frozenset(statuses))

    def with_date_range(self, start: datetime | None, end: datetime | None) -> FilterCriteria:
        return replace(self, date_range=DateRange(start, end))

    def with_amount_range(
        self, minimum: Money | Decimal | None, maximum: Money | Decimal | None
    ) -> FilterCriteria:
        return replace(self, amount_range=AmountRange(minimum, maximum))

    def with_search(self, term: str) -> FilterCriteria:
        return replace(self, search=term or "")
