from .chapters import aggregate_by_chapter, chapter_of_order, chapter_residuals
from .engine import compute_residuals, preview_coverage, read_active_cost, read_status, sort_chronologically
from .models import ChapterTotals, CoverageAllocation, CoveragePreview

__all__ = [
    "compute_residuals",
    "preview_coverage",
    "read_active_cost",
    "read_status",
    "sort_chronologically",
    "aggregate_by_chapter",
    "chapter_of_order",
    "chapter_residuals",
    "ChapterTotals",
    "CoverageAllocation",
    "CoveragePreview",
]
