from __future__ import annotations

from core.services.insights import (
    FALLBACK_EMPTY,
    FALLBACK_ERROR,
    InsightService,
    build_insight_payload,
    build_insight_prompt,
)


class _RecordingProvider:
    def __init__(self, answer: str = "## Findings") -> None:
        self.answer = answer
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.answer


class _FailingProvider:
    def generate(self, prompt: str) -> str:
        raise ConnectionError("offline")


def _seed(services):
    inst = services["funding_service"].create_instrument("Roads", 1000.0)
    services["work_order_service"].create_order("ORD-7", "Pothole repair", 400.0, [inst.id])


def test_payload_lists_orders_and_chapters(services):
    _seed(services)

    payload = build_insight_payload(services["ledger_service"])

    assert payload["orders"][0]["id"] == "ORD-7"
    assert payload["orders"][0]["chapter"] == "Roads"
    assert payload["chapters"][0]["available"] == 600.0
    prompt = build_insight_prompt(payload)
    assert "Pothole repair" in prompt
    assert "markdown" in prompt


def test_generate_insights_returns_provider_text(services):
    _seed(services)
    provider = _RecordingProvider("  ## Findings\nAll good.  ")

    text = InsightService(services["ledger_service"], provider).generate_insights()

    assert text == "## Findings\nAll good."
    assert "ORD-7" in provider.prompts[0]


def test_generate_insights_falls_back_on_failure_or_empty_answer(services):
    ledger = services["ledger_service"]

    assert InsightService(ledger, _FailingProvider()).generate_insights() == FALLBACK_ERROR
    assert InsightService(ledger, _RecordingProvider("   ")).generate_insights() == FALLBACK_EMPTY
