from .service import (
    FALLBACK_EMPTY,
    FALLBACK_ERROR,
    InsightProvider,
    InsightService,
    build_insight_payload,
    build_insight_prompt,
)

__all__ = [
    "InsightProvider",
    "InsightService",
    "build_insight_payload",
    "build_insight_prompt",
    "FALLBACK_EMPTY",
    "FALLBACK_ERROR",
]
