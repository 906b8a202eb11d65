from __future__ import annotations

from typing import List, Sequence

from core.exceptions import NotFoundError
from core.interfaces import FundingInstrumentRepository, WorkOrderRepository
from core.models import WorkOrder
from core.services.allocation import CoveragePreview, compute_residuals, preview_coverage, sort_chronologically


class WorkOrderQueryMixin:
    _instrument_repo: FundingInstrumentRepository
    _order_repo: WorkOrderRepository

    def get_order(self, order_id: str) -> WorkOrder:
        order = self._order_repo.get(order_id)
        if order is None:
            raise NotFoundError("Work order not found.", code="ORDER_NOT_FOUND")
        return order

    def list_orders(self) -> List[WorkOrder]:
        return sort_chronologically(self._order_repo.list_all())

    def preview_coverage(
        self,
        linked_instrument_ids: Sequence[str],
        proposed_cost: float,
        editing_order_id: str | None = None,
    ) -> CoveragePreview:
        """How ``proposed_cost`` would be drawn, ignoring the edited order's own current draw."""
        residuals = compute_residuals(
            self._instrument_repo.list_all(),
            self._order_repo.list_all(),
            exclude_order_id=editing_order_id,
        )
        return preview_coverage(residuals, proposed_cost, linked_instrument_ids)


__all__ = ["WorkOrderQueryMixin"]
