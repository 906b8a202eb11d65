from __future__ import annotations

from datetime import datetime
from typing import Iterable, Mapping, Sequence

from core.models import WorkOrderStatus
from core.services.allocation.models import CoverageAllocation, CoveragePreview


def read_status(order: object) -> str:
    status = getattr(order, "status", None)
    if status is None:
        return WorkOrderStatus.PLANNING.value
    return status.value if hasattr(status, "value") else str(status)


def read_active_cost(order: object) -> float:
    """The figure of the order's current phase; a missing figure counts as zero."""
    status = read_status(order)
    if status == WorkOrderStatus.PAID.value:
        return float(getattr(order, "paid_value", 0.0) or 0.0)
    if status == WorkOrderStatus.CONTRACTED.value:
        return float(getattr(order, "contract_value", 0.0) or 0.0)
    return float(getattr(order, "estimated_value", 0.0) or 0.0)


def chronological_key(order: object) -> tuple[datetime, str]:
    # Same-instant orders fall back to id so the outcome never depends on list order.
    created = getattr(order, "created_at", None) or datetime.min
    return created, str(getattr(order, "id", ""))


def sort_chronologically(orders: Iterable[object]) -> list:
    return sorted(orders, key=chronological_key)


def _walk(
    residuals: dict[str, float],
    cost: float,
    linked_instrument_ids: Sequence[str],
    *,
    track_unknown: bool,
) -> tuple[list[CoverageAllocation], float]:
    remaining = float(cost or 0.0)
    allocations: list[CoverageAllocation] = []
    for instrument_id in linked_instrument_ids:
        known = instrument_id in residuals
        if not known and not track_unknown:
            continue
        available = residuals.get(instrument_id, 0.0)
        taken = 0.0
        if remaining > 0 and available > 0:
            taken = min(remaining, available)
            remaining -= taken
            if known:
                residuals[instrument_id] = available - taken
        allocations.append(
            CoverageAllocation(
                instrument_id=instrument_id,
                used=taken,
                leftover_after=residuals.get(instrument_id, 0.0),
            )
        )
    return allocations, max(remaining, 0.0)


def compute_residuals(
    instruments: Iterable[object],
    orders: Iterable[object],
    exclude_order_id: str | None = None,
) -> dict[str, float]:
    """
    Replay every order's draw, oldest first, against fresh instrument balances.

    Each order's active cost is taken from its linked instruments in the
    order they were listed, never more than an instrument still holds. Cost
    that no linked instrument can absorb is dropped here; it only shows up
    as ``uncovered`` in :func:`preview_coverage`.
    """
    residuals: dict[str, float] = {
        str(getattr(inst, "id")): float(getattr(inst, "amount", 0.0) or 0.0)
        for inst in instruments
    }
    pending = [o for o in orders if exclude_order_id is None or getattr(o, "id", None) != exclude_order_id]
    for order in sort_chronologically(pending):
        _walk(
            residuals,
            read_active_cost(order),
            list(getattr(order, "linked_instrument_ids", None) or []),
            track_unknown=False,
        )
    return residuals


def preview_coverage(
    residuals: Mapping[str, float],
    proposed_cost: float,
    linked_instrument_ids: Sequence[str],
) -> CoveragePreview:
    """Greedy draw of ``proposed_cost`` over the given residuals; the input mapping is left untouched."""
    working = dict(residuals)
    allocations, uncovered = _walk(
        working,
        proposed_cost,
        list(linked_instrument_ids or []),
        track_unknown=True,
    )
    return CoveragePreview(
        proposed_cost=float(proposed_cost or 0.0),
        allocations=tuple(allocations),
        uncovered=uncovered,
    )


__all__ = [
    "read_status",
    "read_active_cost",
    "chronological_key",
    "sort_chronologically",
    "compute_residuals",
    "preview_coverage",
]
