from __future__ import annotations

from typing import Iterable, Mapping

from core.models import WorkOrderStatus
from core.services.allocation.engine import read_status, read_active_cost
from core.services.allocation.models import ChapterTotals

_BUCKET_BY_STATUS = {
    WorkOrderStatus.PLANNING.value: "committed",
    WorkOrderStatus.CONTRACTED.value: "contracted",
    WorkOrderStatus.PAID.value: "spent",
}


def chapter_of_order(order: object, chapter_by_instrument: Mapping[str, str]) -> str | None:
    """Chapter of the first linked instrument that is known, if any."""
    for instrument_id in getattr(order, "linked_instrument_ids", None) or []:
        chapter = chapter_by_instrument.get(instrument_id)
        if chapter is not None:
            return chapter
    return None


def chapter_residuals(
    instruments: Iterable[object],
    residuals: Mapping[str, float],
) -> dict[str, float]:
    out: dict[str, float] = {}
    for inst in instruments:
        chapter = str(getattr(inst, "chapter", ""))
        out[chapter] = out.get(chapter, 0.0) + float(residuals.get(str(getattr(inst, "id")), 0.0))
    return out


def aggregate_by_chapter(
    instruments: Iterable[object],
    orders: Iterable[object],
) -> dict[str, ChapterTotals]:
    buckets: dict[str, dict[str, float]] = {}
    chapter_by_instrument: dict[str, str] = {}
    for inst in instruments:
        chapter = str(getattr(inst, "chapter", ""))
        chapter_by_instrument[str(getattr(inst, "id"))] = chapter
        bucket = buckets.get(chapter)
        if bucket is None:
            bucket = {"total_budget": 0.0, "committed": 0.0, "contracted": 0.0, "spent": 0.0}
            buckets[chapter] = bucket
        bucket["total_budget"] += float(getattr(inst, "amount", 0.0) or 0.0)

    for order in orders:
        chapter = chapter_of_order(order, chapter_by_instrument)
        if chapter is None:
            continue
        key = _BUCKET_BY_STATUS.get(read_status(order), "committed")
        buckets[chapter][key] += read_active_cost(order)

    out: dict[str, ChapterTotals] = {}
    for chapter, bucket in buckets.items():
        consumption = bucket["committed"] + bucket["contracted"] + bucket["spent"]
        out[chapter] = ChapterTotals(
            chapter=chapter,
            total_budget=bucket["total_budget"],
            committed=bucket["committed"],
            contracted=bucket["contracted"],
            spent=bucket["spent"],
            available=bucket["total_budget"] - consumption,
        )
    return out


__all__ = ["chapter_of_order", "chapter_residuals", "aggregate_by_chapter"]
