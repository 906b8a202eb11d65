from __future__ import annotations

from collections import defaultdict
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from core.interfaces import FundingInstrumentRepository, WorkOrderRepository
from core.models import FundingInstrument, WorkOrder
from infra.db.mappers import (
    instrument_from_orm,
    instrument_to_orm,
    links_to_orm,
    order_from_orm,
    order_to_orm,
)
from infra.db.models import FundingInstrumentORM, WorkOrderFundingLinkORM, WorkOrderORM


class SqlAlchemyFundingInstrumentRepository(FundingInstrumentRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, instrument: FundingInstrument) -> None:
        self.session.add(instrument_to_orm(instrument))

    def get(self, instrument_id: str) -> Optional[FundingInstrument]:
        obj = self.session.get(FundingInstrumentORM, instrument_id)
        return instrument_from_orm(obj) if obj else None

    def list_all(self) -> List[FundingInstrument]:
        stmt = select(FundingInstrumentORM).order_by(
            FundingInstrumentORM.chapter, FundingInstrumentORM.created_at, FundingInstrumentORM.id
        )
        rows = self.session.execute(stmt).scalars().all()
        return [instrument_from_orm(row) for row in rows]

    def list_by_chapter(self, chapter: str) -> List[FundingInstrument]:
        stmt = (
            select(FundingInstrumentORM)
            .where(FundingInstrumentORM.chapter == chapter)
            .order_by(FundingInstrumentORM.created_at, FundingInstrumentORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [instrument_from_orm(row) for row in rows]

    def delete(self, instrument_id: str) -> None:
        self.session.query(FundingInstrumentORM).filter_by(id=instrument_id).delete()


class SqlAlchemyWorkOrderRepository(WorkOrderRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, order: WorkOrder) -> None:
        self.session.add(order_to_orm(order))
        self.session.add_all(links_to_orm(order))

    def update(self, order: WorkOrder) -> None:
        obj = self.session.get(WorkOrderORM, order.id)
        if obj is None:
            raise NotFoundError("Work order not found.", code="ORDER_NOT_FOUND")
        obj.order_number = order.order_number
        obj.description = order.description
        obj.status = order.status
        obj.estimated_value = order.estimated_value
        obj.contract_value = order.contract_value
        obj.paid_value = order.paid_value
        obj.contractor = order.contractor
        obj.contract_date = order.contract_date
        obj.paid_on = order.paid_on
        # links are replaced wholesale so positions stay contiguous
        self.session.query(WorkOrderFundingLinkORM).filter_by(order_id=order.id).delete()
        self.session.flush()
        self.session.add_all(links_to_orm(order))

    def get(self, order_id: str) -> Optional[WorkOrder]:
        obj = self.session.get(WorkOrderORM, order_id)
        if obj is None:
            return None
        links = self.session.execute(
            select(WorkOrderFundingLinkORM).where(WorkOrderFundingLinkORM.order_id == order_id)
        ).scalars().all()
        return order_from_orm(obj, links)

    def list_all(self) -> List[WorkOrder]:
        stmt = select(WorkOrderORM).order_by(WorkOrderORM.created_at, WorkOrderORM.id)
        rows = self.session.execute(stmt).scalars().all()
        return self._with_links(rows)

    def list_by_instrument(self, instrument_id: str) -> List[WorkOrder]:
        stmt = (
            select(WorkOrderORM)
            .join(WorkOrderFundingLinkORM, WorkOrderFundingLinkORM.order_id == WorkOrderORM.id)
            .where(WorkOrderFundingLinkORM.instrument_id == instrument_id)
            .order_by(WorkOrderORM.created_at, WorkOrderORM.id)
        )
        rows = self.session.execute(stmt).scalars().unique().all()
        return self._with_links(rows)

    def delete(self, order_id: str) -> None:
        self.session.query(WorkOrderFundingLinkORM).filter_by(order_id=order_id).delete()
        self.session.query(WorkOrderORM).filter_by(id=order_id).delete()

    def _with_links(self, rows: list[WorkOrderORM]) -> List[WorkOrder]:
        if not rows:
            return []
        ids = [row.id for row in rows]
        links_by_order: dict[str, list[WorkOrderFundingLinkORM]] = defaultdict(list)
        stmt = select(WorkOrderFundingLinkORM).where(WorkOrderFundingLinkORM.order_id.in_(ids))
        for link in self.session.execute(stmt).scalars().all():
            links_by_order[link.order_id].append(link)
        return [order_from_orm(row, links_by_order.get(row.id, [])) for row in rows]


__all__ = ["SqlAlchemyFundingInstrumentRepository", "SqlAlchemyWorkOrderRepository"]
