from __future__ import annotations

import json
import logging
from typing import Any, Protocol

from core.services.ledger import LedgerService

logger = logging.getLogger(__name__)

FALLBACK_EMPTY = "Unable to generate an analysis right now."
FALLBACK_ERROR = "The narrative analysis service could not be reached."


class InsightProvider(Protocol):
    def generate(self, prompt: str) -> str: ...


def build_insight_payload(ledger: LedgerService) -> dict[str, Any]:
    orders = [
        {
            "id": row.order_number,
            "desc": row.description,
            "estimated": row.estimated_value,
            "current": row.active_cost,
            "savings": row.savings,
            "status": row.status,
            "chapter": row.chapter,
        }
        for row in ledger.get_catalog_rows()
    ]
    chapters = [
        {
            "chapter": row.chapter,
            "budget": row.total_budget,
            "committed": row.committed,
            "contracted": row.contracted,
            "spent": row.spent,
            "available": row.available,
        }
        for row in ledger.get_chapter_summaries()
    ]
    return {"orders": orders, "chapters": chapters}


def build_insight_prompt(payload: dict[str, Any]) -> str:
    return (
        "Analyse the following public-works orders and budget chapters. "
        "Give high-level findings on:\n"
        "1. Spending efficiency (savings obtained at contracting).\n"
        "2. Budget distribution across chapters.\n"
        "3. Warnings or recommendations for upcoming work.\n\n"
        f"Data: {json.dumps(payload, sort_keys=True, default=str)}\n\n"
        "Format the answer as professional markdown."
    )


class InsightService:
    """Narrative summary of the ledger through an external text provider."""

    def __init__(self, ledger: LedgerService, provider: InsightProvider) -> None:
        self._ledger = ledger
        self._provider = provider

    def generate_insights(self) -> str:
        prompt = build_insight_prompt(build_insight_payload(self._ledger))
        try:
            text = self._provider.generate(prompt)
        except Exception:
            logger.exception("Insight provider failed")
            return FALLBACK_ERROR
        return (text or "").strip() or FALLBACK_EMPTY


__all__ = [
    "InsightProvider",
    "InsightService",
    "build_insight_payload",
    "build_insight_prompt",
    "FALLBACK_EMPTY",
    "FALLBACK_ERROR",
]
