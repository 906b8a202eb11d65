from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import uuid4


def generate_id() -> str:
    return str(uuid4())


def utc_now() -> datetime:
    # Naive UTC so values compare cleanly after a SQLite round-trip.
    return datetime.now(timezone.utc).replace(tzinfo=None)

# ---------- Enums ----------

class WorkOrderStatus(str, Enum):
    PLANNING = "PLANNING"
    CONTRACTED = "CONTRACTED"
    PAID = "PAID"

# ---------- Core models ----------

@dataclass(frozen=True)
class FundingInstrument:
    """An IDV: a fixed allocation of funds inside one budget chapter."""
    id: str
    chapter: str
    amount: float
    code: str = ""
    motivation: str = ""
    created_at: Optional[datetime] = None

    @staticmethod
    def create(chapter: str, amount: float, **extra) -> "FundingInstrument":
        extra.setdefault("created_at", utc_now())
        return FundingInstrument(
            id=generate_id(),
            chapter=chapter,
            amount=amount,
            **extra
        )


@dataclass
class WorkOrder:
    id: str
    order_number: str
    description: str = ""
    created_at: Optional[datetime] = None
    status: WorkOrderStatus = WorkOrderStatus.PLANNING

    # one figure per phase, only the current phase's figure is drawn
    estimated_value: Optional[float] = None
    contract_value: Optional[float] = None
    paid_value: Optional[float] = None

    # first listed is drawn from first
    linked_instrument_ids: List[str] = field(default_factory=list)

    contractor: Optional[str] = None
    contract_date: Optional[date] = None
    paid_on: Optional[date] = None

    @staticmethod
    def create(order_number: str, description: str = "", **extra) -> "WorkOrder":
        extra.setdefault("created_at", utc_now())
        return WorkOrder(
            id=generate_id(),
            order_number=order_number,
            description=description,
            **extra
        )

    @property
    def savings(self) -> float:
        """Economy from contracting: estimate minus contract value."""
        if self.contract_value is None:
            return 0.0
        return float(self.estimated_value or 0.0) - float(self.contract_value or 0.0)
