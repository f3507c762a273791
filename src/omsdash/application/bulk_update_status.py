"""Application service: Bulk Update Status use case.

Partial success is the normal outcome: ids that no longer exist are
skipped, and under a guarded policy orders whose transition is not
allowed are left alone and reported instead of failing the batch.
"""

from __future__ import annotations

from collections.abc import Iterable

from omsdash.application.dto import BulkUpdateResult
from omsdash.domain.model.status import OrderStatus, TransitionPolicy
from omsdash.domain.repository.order_repository import OrderRepository


class BulkUpdateStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        policy: TransitionPolicy | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._policy = policy or TransitionPolicy.permissive()

    def handle(self, order_ids: Iterable[str], status: OrderStatus) -> BulkUpdateResult:
        requested = list(dict.fromkeys(order_ids))
        missing: list[str] = []
        rejected: list[str] = []
        eligible: list[str] = []

        for order_id in requested:
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                missing.append(order_id)
            elif not self._policy.allows(order.status, status):
                rejected.append(order_id)
            else:
                eligible.append(order_id)

        updated = self._order_repo.bulk_set_status(eligible, status)
        return BulkUpdateResult(
            requested=len(requested),
            updated=updated,
            skipped_missing=missing,
            rejected=rejected,
        )
