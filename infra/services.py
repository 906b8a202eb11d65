from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from core.services.funding import FundingService
from core.services.ledger import LedgerService
from core.services.work_order import WorkOrderService
from infra.db.repositories import (
    SqlAlchemyFundingInstrumentRepository,
    SqlAlchemyWorkOrderRepository,
)


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    funding_service: FundingService
    work_order_service: WorkOrderService
    ledger_service: LedgerService

    def as_dict(self) -> dict[str, object]:
        return {
            "session": self.session,
            "funding_service": self.funding_service,
            "work_order_service": self.work_order_service,
            "ledger_service": self.ledger_service,
        }


def build_service_graph(session: Session) -> ServiceGraph:
    instrument_repo = SqlAlchemyFundingInstrumentRepository(session)
    order_repo = SqlAlchemyWorkOrderRepository(session)
    return ServiceGraph(
        session=session,
        funding_service=FundingService(session, instrument_repo, order_repo),
        work_order_service=WorkOrderService(session, order_repo, instrument_repo),
        ledger_service=LedgerService(instrument_repo=instrument_repo, order_repo=order_repo),
    )


__all__ = ["ServiceGraph", "build_service_graph"]
