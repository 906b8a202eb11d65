from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import BusinessRuleError, FundingShortfallError, ValidationError
from core.interfaces import FundingInstrumentRepository, WorkOrderRepository
from core.models import WorkOrder, WorkOrderStatus
from core.services.allocation import CoveragePreview, read_active_cost
from core.services.work_order.query import WorkOrderQueryMixin
from core.services.work_order.validation import WorkOrderValidationMixin

logger = logging.getLogger(__name__)

_PHASE_RANK = {
    WorkOrderStatus.PLANNING: 0,
    WorkOrderStatus.CONTRACTED: 1,
    WorkOrderStatus.PAID: 2,
}


class WorkOrderLifecycleMixin(WorkOrderValidationMixin, WorkOrderQueryMixin):
    _session: Session
    _instrument_repo: FundingInstrumentRepository
    _order_repo: WorkOrderRepository

    def _require_coverage(
        self,
        *,
        cost: float,
        linked_instrument_ids: Sequence[str],
        editing_order_id: str | None,
        order_number: str,
    ) -> CoveragePreview:
        preview = self.preview_coverage(linked_instrument_ids, cost, editing_order_id=editing_order_id)
        if preview.uncovered > 0:
            logger.warning(
                "Refused save of order %s: %.2f of %.2f not covered by its funding",
                order_number,
                preview.uncovered,
                preview.proposed_cost,
            )
            raise FundingShortfallError(
                f"Selected funding cannot cover this order: {preview.uncovered:.2f} uncovered.",
                preview=preview,
            )
        return preview

    def _persist(self, order: WorkOrder, *, is_new: bool, action: str) -> WorkOrder:
        try:
            if is_new:
                self._order_repo.add(order)
            else:
                self._order_repo.update(order)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error saving work order %s (%s): %s", order.order_number, action, e)
            raise
        logger.info(
            "Work order %s %s: status=%s active_cost=%.2f funding=%s",
            order.order_number,
            action,
            order.status.value,
            read_active_cost(order),
            ",".join(order.linked_instrument_ids),
        )
        domain_events.orders_changed.emit(order.id)
        return order

    def create_order(
        self,
        order_number: str,
        description: str = "",
        estimated_value: float = 0.0,
        linked_instrument_ids: Sequence[str] | None = None,
    ) -> WorkOrder:
        order_number = self._validate_order_number(order_number)
        estimated = self._validate_amount("Estimated value", estimated_value) or 0.0
        instruments = self._resolve_funding(linked_instrument_ids)
        linked = [inst.id for inst in instruments]

        self._require_coverage(
            cost=estimated,
            linked_instrument_ids=linked,
            editing_order_id=None,
            order_number=order_number,
        )
        order = WorkOrder.create(
            order_number=order_number,
            description=(description or "").strip(),
            estimated_value=estimated,
            linked_instrument_ids=linked,
        )
        return self._persist(order, is_new=True, action="created")

    def update_order(
        self,
        order_id: str,
        order_number: str | None = None,
        description: str | None = None,
        estimated_value: float | None = None,
        contract_value: float | None = None,
        paid_value: float | None = None,
        linked_instrument_ids: Sequence[str] | None = None,
        contractor: str | None = None,
        contract_date: date | None = None,
        paid_on: date | None = None,
    ) -> WorkOrder:
        order = self.get_order(order_id)
        rank = _PHASE_RANK[order.status]
        if contract_value is not None and rank < _PHASE_RANK[WorkOrderStatus.CONTRACTED]:
            raise ValidationError(
                "Contract value can only be edited once the order is contracted.",
                code="PHASE_FIELD_LOCKED",
            )
        if paid_value is not None and rank < _PHASE_RANK[WorkOrderStatus.PAID]:
            raise ValidationError(
                "Paid value can only be edited once the order is paid.",
                code="PHASE_FIELD_LOCKED",
            )

        previous_cost = read_active_cost(order)
        previous_links = list(order.linked_instrument_ids)

        if order_number is not None:
            order.order_number = self._validate_order_number(order_number)
        if description is not None:
            order.description = description.strip()
        if estimated_value is not None:
            order.estimated_value = self._validate_amount("Estimated value", estimated_value)
        if contract_value is not None:
            order.contract_value = self._validate_amount("Contract value", contract_value)
        if paid_value is not None:
            order.paid_value = self._validate_amount("Paid value", paid_value)
        if linked_instrument_ids is not None:
            order.linked_instrument_ids = [inst.id for inst in self._resolve_funding(linked_instrument_ids)]
        if contractor is not None:
            order.contractor = contractor.strip() or None
        if contract_date is not None:
            order.contract_date = contract_date
        if paid_on is not None:
            order.paid_on = paid_on

        if read_active_cost(order) != previous_cost or order.linked_instrument_ids != previous_links:
            self._require_coverage(
                cost=read_active_cost(order),
                linked_instrument_ids=order.linked_instrument_ids,
                editing_order_id=order.id,
                order_number=order.order_number,
            )
        return self._persist(order, is_new=False, action="updated")

    def record_contract(
        self,
        order_id: str,
        contract_value: float,
        contractor: str | None = None,
        contract_date: date | None = None,
    ) -> WorkOrder:
        order = self.get_order(order_id)
        if order.status != WorkOrderStatus.PLANNING:
            raise BusinessRuleError(
                f"Only orders in planning can be contracted (current: {order.status.value}).",
                code="INVALID_STATUS_TRANSITION",
            )
        value = self._validate_amount("Contract value", contract_value)
        if value is None:
            raise ValidationError("Contract value is required.", code="ORDER_VALUE_REQUIRED")

        self._require_coverage(
            cost=value,
            linked_instrument_ids=order.linked_instrument_ids,
            editing_order_id=order.id,
            order_number=order.order_number,
        )
        order.contract_value = value
        order.contractor = (contractor or "").strip() or None
        order.contract_date = contract_date or date.today()
        order.status = WorkOrderStatus.CONTRACTED
        return self._persist(order, is_new=False, action="contracted")

    def record_payment(
        self,
        order_id: str,
        paid_value: float,
        paid_on: date | None = None,
    ) -> WorkOrder:
        order = self.get_order(order_id)
        if order.status != WorkOrderStatus.CONTRACTED:
            raise BusinessRuleError(
                f"Only contracted orders can be paid (current: {order.status.value}).",
                code="INVALID_STATUS_TRANSITION",
            )
        value = self._validate_amount("Paid value", paid_value)
        if value is None:
            raise ValidationError("Paid value is required.", code="ORDER_VALUE_REQUIRED")

        self._require_coverage(
            cost=value,
            linked_instrument_ids=order.linked_instrument_ids,
            editing_order_id=order.id,
            order_number=order.order_number,
        )
        order.paid_value = value
        order.paid_on = paid_on or date.today()
        order.status = WorkOrderStatus.PAID
        return self._persist(order, is_new=False, action="paid")

    def delete_order(self, order_id: str) -> None:
        order = self.get_order(order_id)
        try:
            self._order_repo.delete(order_id)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error deleting work order %s: %s", order.order_number, e)
            raise
        logger.info("Deleted work order %s", order.order_number)
        domain_events.orders_changed.emit(order_id)


__all__ = ["WorkOrderLifecycleMixin"]
