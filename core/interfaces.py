from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from core.models import FundingInstrument, WorkOrder


class FundingInstrumentRepository(ABC):
    @abstractmethod
    def add(self, instrument: FundingInstrument) -> None: ...

    @abstractmethod
    def get(self, instrument_id: str) -> Optional[FundingInstrument]: ...

    @abstractmethod
    def list_all(self) -> List[FundingInstrument]: ...

    @abstractmethod
    def list_by_chapter(self, chapter: str) -> List[FundingInstrument]: ...

    @abstractmethod
    def delete(self, instrument_id: str) -> None: ...


class WorkOrderRepository(ABC):
    @abstractmethod
    def add(self, order: WorkOrder) -> None: ...

    @abstractmethod
    def update(self, order: WorkOrder) -> None: ...

    @abstractmethod
    def get(self, order_id: str) -> Optional[WorkOrder]: ...

    @abstractmethod
    def list_all(self) -> List[WorkOrder]: ...

    @abstractmethod
    def list_by_instrument(self, instrument_id: str) -> List[WorkOrder]: ...

    @abstractmethod
    def delete(self, order_id: str) -> None: ...


__all__ = ["FundingInstrumentRepository", "WorkOrderRepository"]
