from __future__ import annotations

import logging
import math
from typing import List

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from core.interfaces import FundingInstrumentRepository, WorkOrderRepository
from core.models import FundingInstrument

logger = logging.getLogger(__name__)


class FundingService:
    """Funding instruments (IDVs): created once, read-only afterwards."""

    def __init__(
        self,
        session: Session,
        instrument_repo: FundingInstrumentRepository,
        order_repo: WorkOrderRepository,
    ):
        self._session: Session = session
        self._instrument_repo: FundingInstrumentRepository = instrument_repo
        self._order_repo: WorkOrderRepository = order_repo

    def create_instrument(
        self,
        chapter: str,
        amount: float,
        code: str = "",
        motivation: str = "",
    ) -> FundingInstrument:
        chapter = (chapter or "").strip()
        if not chapter:
            raise ValidationError("Chapter is required.", code="CHAPTER_REQUIRED")
        if amount is not None and not math.isfinite(amount):
            raise ValidationError("Instrument amount must be a finite figure.", code="INSTRUMENT_AMOUNT_INVALID")
        if amount is None or amount < 0:
            raise ValidationError("Instrument amount cannot be negative.", code="INSTRUMENT_AMOUNT_NEGATIVE")

        instrument = FundingInstrument.create(
            chapter=chapter,
            amount=float(amount),
            code=(code or "").strip(),
            motivation=(motivation or "").strip(),
        )
        try:
            self._instrument_repo.add(instrument)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error creating funding instrument: %s", e)
            raise

        logger.info("Created funding instrument %s (%s) in chapter %s: %.2f",
                    instrument.id, instrument.code or "-", chapter, instrument.amount)
        domain_events.funding_changed.emit(chapter)
        return instrument

    def get_instrument(self, instrument_id: str) -> FundingInstrument:
        instrument = self._instrument_repo.get(instrument_id)
        if instrument is None:
            raise NotFoundError("Funding instrument not found.", code="INSTRUMENT_NOT_FOUND")
        return instrument

    def list_instruments(self) -> List[FundingInstrument]:
        return self._instrument_repo.list_all()

    def list_by_chapter(self, chapter: str) -> List[FundingInstrument]:
        return self._instrument_repo.list_by_chapter(chapter)

    def list_chapters(self) -> List[str]:
        return sorted({inst.chapter for inst in self._instrument_repo.list_all()})

    def delete_instrument(self, instrument_id: str) -> None:
        instrument = self.get_instrument(instrument_id)
        linked = self._order_repo.list_by_instrument(instrument_id)
        if linked:
            raise BusinessRuleError(
                f"Instrument is funding {len(linked)} work order(s) and cannot be deleted.",
                code="INSTRUMENT_IN_USE",
            )
        try:
            self._instrument_repo.delete(instrument_id)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error deleting funding instrument %s: %s", instrument_id, e)
            raise

        logger.info("Deleted funding instrument %s", instrument_id)
        domain_events.funding_changed.emit(instrument.chapter)


__all__ = ["FundingService"]
