from __future__ import annotations

from typing import List

from core.interfaces import FundingInstrumentRepository, WorkOrderRepository
from core.models import WorkOrderStatus
from core.services.allocation import (
    ChapterTotals,
    aggregate_by_chapter,
    chapter_of_order,
    chapter_residuals,
    compute_residuals,
    read_active_cost,
    sort_chronologically,
)
from core.services.ledger.models import CatalogRow, DashboardSummary, InstrumentBalanceRow


class LedgerService:
    """Read models over the allocation ledger, recomputed from the repositories on every call."""

    def __init__(
        self,
        *,
        instrument_repo: FundingInstrumentRepository,
        order_repo: WorkOrderRepository,
    ) -> None:
        self._instrument_repo: FundingInstrumentRepository = instrument_repo
        self._order_repo: WorkOrderRepository = order_repo

    def get_residuals(self, exclude_order_id: str | None = None) -> dict[str, float]:
        return compute_residuals(
            self._instrument_repo.list_all(),
            self._order_repo.list_all(),
            exclude_order_id=exclude_order_id,
        )

    def get_instrument_balances(self) -> List[InstrumentBalanceRow]:
        instruments = self._instrument_repo.list_all()
        residuals = compute_residuals(instruments, self._order_repo.list_all())
        rows = [
            InstrumentBalanceRow(
                instrument_id=inst.id,
                chapter=inst.chapter,
                code=inst.code,
                amount=inst.amount,
                residual=residuals.get(inst.id, 0.0),
            )
            for inst in instruments
        ]
        rows.sort(key=lambda row: (row.chapter.lower(), row.code.lower(), row.instrument_id))
        return rows

    def get_chapter_summaries(self) -> List[ChapterTotals]:
        totals = aggregate_by_chapter(self._instrument_repo.list_all(), self._order_repo.list_all())
        return sorted(totals.values(), key=lambda row: row.chapter.lower())

    def get_catalog_rows(self) -> List[CatalogRow]:
        instruments = self._instrument_repo.list_all()
        orders = sort_chronologically(self._order_repo.list_all())
        residuals = compute_residuals(instruments, orders)
        by_chapter = chapter_residuals(instruments, residuals)
        chapter_by_instrument = {inst.id: inst.chapter for inst in instruments}

        rows: List[CatalogRow] = []
        for order in orders:
            chapter = chapter_of_order(order, chapter_by_instrument)
            rows.append(
                CatalogRow(
                    order_id=order.id,
                    order_number=order.order_number,
                    description=order.description,
                    status=order.status.value,
                    created_at=order.created_at,
                    chapter=chapter,
                    active_cost=read_active_cost(order),
                    estimated_value=float(order.estimated_value or 0.0),
                    savings=order.savings,
                    chapter_residual=(None if chapter is None else by_chapter.get(chapter, 0.0)),
                    linked_instrument_ids=tuple(order.linked_instrument_ids),
                )
            )
        return rows

    def get_dashboard_summary(self) -> DashboardSummary:
        instruments = self._instrument_repo.list_all()
        orders = self._order_repo.list_all()
        chapters = aggregate_by_chapter(instruments, orders)
        chapter_by_instrument = {inst.id: inst.chapter for inst in instruments}

        total_budget = sum(row.total_budget for row in chapters.values())
        consumption = sum(row.consumption for row in chapters.values())
        savings = sum(order.savings for order in orders)
        denominator = consumption + savings

        count_by_status = {status.value: 0 for status in WorkOrderStatus}
        count_by_chapter: dict[str, int] = {}
        for order in orders:
            count_by_status[order.status.value] = count_by_status.get(order.status.value, 0) + 1
            chapter = chapter_of_order(order, chapter_by_instrument)
            if chapter is not None:
                count_by_chapter[chapter] = count_by_chapter.get(chapter, 0) + 1

        return DashboardSummary(
            total_budget=total_budget,
            total_consumption=consumption,
            total_available=total_budget - consumption,
            total_savings=savings,
            savings_efficiency_percent=(savings / denominator * 100.0) if denominator else 0.0,
            orders_total=len(orders),
            count_by_status=count_by_status,
            count_by_chapter=count_by_chapter,
        )


__all__ = ["LedgerService"]
