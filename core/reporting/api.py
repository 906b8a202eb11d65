"""Reporting API wrappers around renderer classes."""

from pathlib import Path
from datetime import date
from contextlib import suppress

from core.services.ledger import LedgerService
from core.reporting.renderers.chapters import ChapterBudgetChartRenderer
from core.reporting.renderers.excel import ExcelReportRenderer
from core.reporting.renderers.pdf import PdfReportRenderer
from core.reporting.contexts import (
    ExcelReportContext,
    PdfReportContext,
)

DEFAULT_TITLE = "Works Budget - Chapter Summary"


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _cleanup_temp_artifact(path: Path | None, temp_dir: Path | None = None) -> None:
    if path:
        with suppress(FileNotFoundError, PermissionError, OSError):
            path.unlink()

    parent = temp_dir if temp_dir is not None else (path.parent if path else None)
    if parent is None:
        return
    if parent.exists():
        with suppress(FileNotFoundError, PermissionError, OSError):
            if not any(parent.iterdir()):
                parent.rmdir()


def generate_chapter_chart_png(ledger: LedgerService, output_path: str | Path) -> Path:
    chapters = ledger.get_chapter_summaries()
    return ChapterBudgetChartRenderer().render(chapters, _ensure_parent(Path(output_path)))


def generate_excel_report(
    ledger: LedgerService,
    output_path: str | Path,
    as_of: date | None = None,
    title: str = DEFAULT_TITLE,
) -> Path:
    ctx = ExcelReportContext(
        title=title,
        dashboard=ledger.get_dashboard_summary(),
        chapters=ledger.get_chapter_summaries(),
        orders=ledger.get_catalog_rows(),
        instruments=ledger.get_instrument_balances(),
        as_of=as_of or date.today(),
    )
    return ExcelReportRenderer().render(ctx, _ensure_parent(Path(output_path)))


def generate_pdf_report(
    ledger: LedgerService,
    output_path: str | Path,
    temp_dir: str | Path = "tmp_reports",
    as_of: date | None = None,
    title: str = DEFAULT_TITLE,
) -> Path:
    temp_dir = Path(temp_dir)
    temp_dir.mkdir(parents=True, exist_ok=True)
    chart_path: Path | None = temp_dir / "chapter_budget.png"
    try:
        generate_chapter_chart_png(ledger, chart_path)
    except ValueError:
        chart_path = None

    ctx = PdfReportContext(
        title=title,
        dashboard=ledger.get_dashboard_summary(),
        chapters=ledger.get_chapter_summaries(),
        orders=ledger.get_catalog_rows(),
        instruments=ledger.get_instrument_balances(),
        as_of=as_of or date.today(),
        chart_png_path=str(chart_path) if chart_path else "",
    )
    try:
        return PdfReportRenderer().render(ctx, _ensure_parent(Path(output_path)))
    finally:
        _cleanup_temp_artifact(chart_path, temp_dir=temp_dir)
