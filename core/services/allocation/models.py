from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CoverageAllocation:
    instrument_id: str
    used: float
    leftover_after: float

    @property
    def exhausted(self) -> bool:
        return self.leftover_after == 0 and self.used > 0


@dataclass(frozen=True)
class CoveragePreview:
    proposed_cost: float
    allocations: tuple[CoverageAllocation, ...]
    uncovered: float

    @property
    def covered(self) -> float:
        return float(self.proposed_cost) - float(self.uncovered)

    @property
    def is_fully_covered(self) -> bool:
        return self.uncovered <= 0


@dataclass(frozen=True)
class ChapterTotals:
    chapter: str
    total_budget: float
    committed: float
    contracted: float
    spent: float
    available: float

    @property
    def consumption(self) -> float:
        return self.committed + self.contracted + self.spent

    @property
    def utilization_percent(self) -> float:
        if self.total_budget <= 0:
            return 0.0
        return self.consumption / self.total_budget * 100.0

    @property
    def utilization_level(self) -> str:
        pct = self.utilization_percent
        if pct > 100.0:
            return "over"
        if pct > 85.0:
            return "warning"
        return "ok"


__all__ = ["CoverageAllocation", "CoveragePreview", "ChapterTotals"]
