from __future__ import annotations

from sqlalchemy.orm import Session

from core.interfaces import FundingInstrumentRepository, WorkOrderRepository
from core.services.work_order.lifecycle import WorkOrderLifecycleMixin
from core.services.work_order.query import WorkOrderQueryMixin
from core.services.work_order.validation import WorkOrderValidationMixin


class WorkOrderService(WorkOrderLifecycleMixin, WorkOrderValidationMixin, WorkOrderQueryMixin):
    """Work order service orchestrator: wiring repositories + composing mixins."""

    def __init__(
        self,
        session: Session,
        order_repo: WorkOrderRepository,
        instrument_repo: FundingInstrumentRepository,
    ):
        self._session: Session = session
        self._order_repo: WorkOrderRepository = order_repo
        self._instrument_repo: FundingInstrumentRepository = instrument_repo


__all__ = ["WorkOrderService"]
