from __future__ import annotations

import math
from typing import Sequence

from core.exceptions import NotFoundError, ValidationError
from core.interfaces import FundingInstrumentRepository
from core.models import FundingInstrument


class WorkOrderValidationMixin:
    _instrument_repo: FundingInstrumentRepository

    def _validate_order_number(self, order_number: str) -> str:
        cleaned = (order_number or "").strip()
        if not cleaned:
            raise ValidationError("Order number cannot be empty.", code="ORDER_NUMBER_EMPTY")
        return cleaned

    def _validate_amount(self, label: str, value: float | None) -> float | None:
        if value is None:
            return None
        if not math.isfinite(value):
            raise ValidationError(f"{label} must be a finite amount.", code="ORDER_VALUE_INVALID")
        if value < 0:
            raise ValidationError(f"{label} cannot be negative.", code="ORDER_VALUE_NEGATIVE")
        return float(value)

    def _resolve_funding(self, linked_instrument_ids: Sequence[str] | None) -> list[FundingInstrument]:
        ids = [str(i).strip() for i in (linked_instrument_ids or []) if str(i).strip()]
        if not ids:
            raise ValidationError(
                "Select at least one funding instrument.",
                code="NO_FUNDING_SELECTED",
            )
        if len(set(ids)) != len(ids):
            raise ValidationError(
                "A funding instrument can only be listed once per order.",
                code="DUPLICATE_FUNDING_LINK",
            )

        instruments: list[FundingInstrument] = []
        for instrument_id in ids:
            instrument = self._instrument_repo.get(instrument_id)
            if instrument is None:
                raise NotFoundError(
                    f"Funding instrument {instrument_id} not found.",
                    code="INSTRUMENT_NOT_FOUND",
                )
            instruments.append(instrument)

        chapters = {inst.chapter for inst in instruments}
        if len(chapters) > 1:
            raise ValidationError(
                "All funding instruments of an order must belong to the same chapter.",
                code="MIXED_CHAPTER_FUNDING",
            )
        return instruments


__all__ = ["WorkOrderValidationMixin"]
