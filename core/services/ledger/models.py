from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional


@dataclass(frozen=True)
class CatalogRow:
    order_id: str
    order_number: str
    description: str
    status: str
    created_at: Optional[datetime]
    chapter: Optional[str]
    active_cost: float
    estimated_value: float
    savings: float
    chapter_residual: Optional[float]
    linked_instrument_ids: tuple[str, ...]


@dataclass(frozen=True)
class InstrumentBalanceRow:
    instrument_id: str
    chapter: str
    code: str
    amount: float
    residual: float

    @property
    def drawn(self) -> float:
        return self.amount - self.residual


@dataclass(frozen=True)
class DashboardSummary:
    total_budget: float
    total_consumption: float
    total_available: float
    total_savings: float
    savings_efficiency_percent: float
    orders_total: int
    count_by_status: Dict[str, int]
    count_by_chapter: Dict[str, int]


__all__ = ["CatalogRow", "InstrumentBalanceRow", "DashboardSummary"]
