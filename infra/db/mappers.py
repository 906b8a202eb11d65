from __future__ import annotations

from typing import Iterable

from core.models import FundingInstrument, WorkOrder, WorkOrderStatus
from infra.db.models import FundingInstrumentORM, WorkOrderFundingLinkORM, WorkOrderORM


def instrument_to_orm(instrument: FundingInstrument) -> FundingInstrumentORM:
    return FundingInstrumentORM(
        id=instrument.id,
        chapter=instrument.chapter,
        amount=instrument.amount,
        code=instrument.code,
        motivation=instrument.motivation,
        created_at=instrument.created_at,
    )


def instrument_from_orm(obj: FundingInstrumentORM) -> FundingInstrument:
    return FundingInstrument(
        id=obj.id,
        chapter=obj.chapter,
        amount=float(obj.amount or 0.0),
        code=obj.code or "",
        motivation=obj.motivation or "",
        created_at=obj.created_at,
    )


def order_to_orm(order: WorkOrder) -> WorkOrderORM:
    return WorkOrderORM(
        id=order.id,
        order_number=order.order_number,
        description=order.description,
        created_at=order.created_at,
        status=order.status,
        estimated_value=order.estimated_value,
        contract_value=order.contract_value,
        paid_value=order.paid_value,
        contractor=order.contractor,
        contract_date=order.contract_date,
        paid_on=order.paid_on,
    )


def links_to_orm(order: WorkOrder) -> list[WorkOrderFundingLinkORM]:
    return [
        WorkOrderFundingLinkORM(order_id=order.id, instrument_id=instrument_id, position=index)
        for index, instrument_id in enumerate(order.linked_instrument_ids)
    ]


def order_from_orm(obj: WorkOrderORM, links: Iterable[WorkOrderFundingLinkORM]) -> WorkOrder:
    ordered = sorted(links, key=lambda link: link.position)
    return WorkOrder(
        id=obj.id,
        order_number=obj.order_number,
        description=obj.description or "",
        created_at=obj.created_at,
        status=WorkOrderStatus(obj.status) if obj.status else WorkOrderStatus.PLANNING,
        estimated_value=obj.estimated_value,
        contract_value=obj.contract_value,
        paid_value=obj.paid_value,
        linked_instrument_ids=[link.instrument_id for link in ordered],
        contractor=obj.contractor,
        contract_date=obj.contract_date,
        paid_on=obj.paid_on,
    )


__all__ = [
    "instrument_to_orm",
    "instrument_from_orm",
    "order_to_orm",
    "order_from_orm",
    "links_to_orm",
]
