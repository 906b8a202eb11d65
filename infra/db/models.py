# infra/db/models.py
from __future__ import annotations
from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    String,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Enum as SAEnum,
    Index,
    Integer,
)
from sqlalchemy.orm import Mapped, mapped_column

from infra.db.base import Base
from core.models import WorkOrderStatus


class FundingInstrumentORM(Base):
    __tablename__ = "funding_instruments"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    chapter: Mapped[str] = mapped_column(String(64), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    code: Mapped[str] = mapped_column(String(64), default="")
    motivation: Mapped[str] = mapped_column(String, default="")
    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
Index("idx_funding_instruments_chapter", FundingInstrumentORM.chapter)


class WorkOrderORM(Base):
    __tablename__ = "work_orders"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    order_number: Mapped[str] = mapped_column(String(64), nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    status: Mapped[WorkOrderStatus] = mapped_column(
        SAEnum(WorkOrderStatus), default=WorkOrderStatus.PLANNING, nullable=False
    )

    estimated_value: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    contract_value: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    paid_value: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    contractor: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    contract_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    paid_on: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
Index("idx_work_orders_created_at", WorkOrderORM.created_at)


class WorkOrderFundingLinkORM(Base):
    __tablename__ = "work_order_funding_links"

    order_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("work_orders.id", ondelete="CASCADE"),
        primary_key=True,
    )
    instrument_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("funding_instruments.id", ondelete="RESTRICT"),
        primary_key=True,
    )
    # draw order inside the order's funding list
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
Index("idx_funding_links_instrument_id", WorkOrderFundingLinkORM.instrument_id)
